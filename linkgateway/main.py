from linkgateway.core.config import load_settings
from linkgateway.core.logging_config import configure_logging
from linkgateway.factory import create_app

settings = load_settings()
configure_logging(settings.log_level)

app = create_app(settings)
