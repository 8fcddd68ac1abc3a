"""
Framework Default Values
All hardcoded values should be defined here and accessed via Config.get()
This file contains sensible defaults that can be overridden in config/ modules
"""

# ============================================================================
# ROUTING DEFAULTS
# ============================================================================

# Separator used by set_before_filters() / set_after_filters() strings
DEFAULT_FILTER_DELIMITER = '|'

# Unknown filter names are skipped (False) or raise UnknownFilterError (True)
DEFAULT_STRICT_FILTERS = False

# HTTP methods a route gets when none are given
DEFAULT_ROUTE_METHODS = ['GET', 'HEAD']

# ============================================================================
# LOGGING DEFAULTS
# ============================================================================

DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_LOG_BACKUP_COUNT = 5
