"""Domain initialization and configuration."""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging(log_dir="logs", log_file_prefix="storefront")

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
