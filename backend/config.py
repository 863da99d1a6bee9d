import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # HTTP front-end
    PORT = int(os.environ.get('PORT', '8080'))
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    # Storage backend (RPC server and the client connecting to it)
    BACKEND_HOST = os.environ.get('BACKEND_HOST') or '127.0.0.1'
    BACKEND_PORT = int(os.environ.get('BACKEND_PORT', '4567'))
    BACKEND_USERNAME = os.environ.get('BACKEND_USERNAME') or None
    BACKEND_PASSWD = os.environ.get('BACKEND_PASSWD') or None
    BACKEND_RPC_TIMEOUT = float(os.environ.get('BACKEND_RPC_TIMEOUT', '10'))
    # Relative sqlite paths land in the backend app's instance folder
    SQLALCHEMY_DATABASE_URI = os.environ.get('BACKEND_DATABASE_URL') or 'sqlite:///timetrack.sqlite'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
