import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Origin of the browser client allowed by CORS and Socket.IO
    CLIENT_URL = os.environ.get('CLIENT_URL') or 'http://localhost:3000'
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3001'))
    # Socket.IO namespace the game events are registered on
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Random bytes per game id (rendered as hex, so 4 -> 8 characters)
    GAME_ID_BYTES = int(os.environ.get('GAME_ID_BYTES', '4'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
