import os


class Config:
    HOST = os.environ.get('WEBCIPHER_HOST', '127.0.0.1')
    PORT = int(os.environ.get('WEBCIPHER_PORT', '3000'))
    LOG_LEVEL = os.environ.get('WEBCIPHER_LOG_LEVEL', 'INFO').upper()
    # request body limit, form and json alike
    MAX_CONTENT_LENGTH = 1024 * 1024


class TestingConfig(Config):
    TESTING = True
