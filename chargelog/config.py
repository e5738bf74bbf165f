import os


class Config:
    """Application configuration from environment variables."""

    # Database
    DATABASE_URL = os.environ.get('DATABASE_URL', 'sqlite:///chargelog.db')

    # Flask
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')
    FLASK_ENV = os.environ.get('FLASK_ENV', 'production')
    DEBUG = FLASK_ENV == 'development'
    FLASK_HOST = os.environ.get('FLASK_HOST', '0.0.0.0')
    FLASK_PORT = int(os.environ.get('FLASK_PORT', 8080))

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Calendar used for "this month" / "this year" windows
    TIMEZONE = os.environ.get('TIMEZONE', 'Asia/Shanghai')

    # Import / export
    MAX_UPLOAD_BYTES = int(os.environ.get('MAX_UPLOAD_BYTES', 10 * 1024 * 1024))
    EXPORT_FILE_PREFIX = os.environ.get('EXPORT_FILE_PREFIX', '车辆费用记录')

    # Dashboard
    CONSUMPTION_CHART_POINTS = int(os.environ.get('CONSUMPTION_CHART_POINTS', 7))
