from timetrack import create_backend, db, socketio

app = create_backend()

if __name__ == '__main__':
    with app.app_context():
        db.create_all()
    # Use SocketIO server to serve the RPC namespace
    socketio.run(app, host=app.config['BACKEND_HOST'], port=app.config['BACKEND_PORT'],
                 allow_unsafe_werkzeug=True)
