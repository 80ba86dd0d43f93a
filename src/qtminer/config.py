import os


class Config:
    """Application configuration"""

    # Record source
    DATABASE_URL = os.getenv('QTMINER_DATABASE_URL', 'sqlite:///qtminer.db')

    # Session server
    HOST = os.getenv('QTMINER_HOST', '0.0.0.0')
    PORT = int(os.getenv('QTMINER_PORT', '8080'))

    # Saved cluster files are resolved against this folder
    CLUSTER_FOLDER = os.getenv('QTMINER_CLUSTER_FOLDER', 'clusters')

    # Logging
    LOG_LEVEL = os.getenv('QTMINER_LOG_LEVEL', 'INFO')
