from .catalog import DIGITAL_PRODUCTS, DOWNLOAD_LINKS
from .registry import DownloadLinkRegistry, get_registry, load_products, normalize_name

__all__ = [
    "DIGITAL_PRODUCTS",
    "DOWNLOAD_LINKS",
    "DownloadLinkRegistry",
    "get_registry",
    "load_products",
    "normalize_name",
]
