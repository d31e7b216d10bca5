"""Media Browser - media library catalog with a cached thumbnail pipeline."""

__version__ = "1.0.0"
__author__ = "Media Browser Team"

# Import key classes for convenient top-level access
from .config import LibraryConfig, ConfigError, load_config
from .database import DatabaseManager
from .library import MediaLibrary
from .models import MediaFile, MediaKind, ThumbnailOutcome, build
from .scanning import FileDiscovery

# Common convenience imports
from .utils import check_access, ensure_directory, ensure_dir, ToolRunner

__all__ = [
    # Core classes
    'MediaLibrary',
    'DatabaseManager',
    'FileDiscovery',
    'ToolRunner',

    # Configuration
    'LibraryConfig',
    'ConfigError',
    'load_config',

    # Data models
    'MediaFile',
    'MediaKind',
    'ThumbnailOutcome',
    'build',

    # Utilities
    'check_access',
    'ensure_directory',
    'ensure_dir',

    # Package metadata
    '__version__',
    '__author__'
]
