from timetrack import db
import json

# Range and prefix reads need keys compared byte by byte. SQLite's default
# BINARY collation already does that; other databases need it spelled out.
KEY_TYPE = (
    db.String(512)
    .with_variant(db.String(512, collation='C'), 'postgresql')
    .with_variant(db.String(512, collation='utf8mb4_bin'), 'mysql', 'mariadb')
)


class Record(db.Model):
    """One entry of the sorted key-value store. Values are JSON text."""
    __tablename__ = 'record'
    key = db.Column(KEY_TYPE, primary_key=True)
    value = db.Column(db.Text, nullable=False)

    def __init__(self, key, value=None, **kwargs):
        super(Record, self).__init__(key=key, **kwargs)
        self.set_value(value)

    def set_value(self, value):
        self.value = json.dumps(value)

    def get_value(self):
        return json.loads(self.value)

    def to_pair(self):
        return [self.key, self.get_value()]
