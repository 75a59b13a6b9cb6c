"""
Logging configuration for the EV trip planner
Easy switching between different logging modes
"""

# =============================================================================
# LOGGING CONFIGURATIONS
# =============================================================================

# Production mode - minimal logging
PRODUCTION_LOGGING = {
    'log_level': 'WARNING',
    'enable_console': True,
    'enable_file': False,
    'log_format': 'minimal'
}

# Development mode - standard logging
DEVELOPMENT_LOGGING = {
    'log_level': 'INFO',
    'enable_console': True,
    'enable_file': True,
    'log_format': 'simple'
}

# Debug mode - detailed logging
DEBUG_LOGGING = {
    'log_level': 'DEBUG',
    'enable_console': True,
    'enable_file': True,
    'log_format': 'detailed'
}

# Silent mode - no logging
SILENT_LOGGING = {
    'log_level': 'CRITICAL',
    'enable_console': False,
    'enable_file': False,
    'log_format': 'minimal'
}

# Testing mode - file only logging
TESTING_LOGGING = {
    'log_level': 'DEBUG',
    'enable_console': False,
    'enable_file': True,
    'log_format': 'detailed'
}

# =============================================================================
# QUICK SWITCHES
# =============================================================================

# Change this to switch logging modes
CURRENT_LOGGING_MODE = 'DEVELOPMENT'  # Options: PRODUCTION, DEVELOPMENT, DEBUG, SILENT, TESTING

# =============================================================================
# MODULE-SPECIFIC LOGGING
# =============================================================================

# Enable/disable logging for specific modules
MODULE_LOGGING = {
    'charging_station_api': True,
    'route_station_search': True,
    'directions_client': True,
    'drive_simulator': True,
    'ev_route_planner': True,
}

# =============================================================================
# LOG FILE SETTINGS
# =============================================================================

LOG_DIR = "debug_logs"

# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def get_logging_config(mode: str = None) -> dict:
    """Get logging configuration for specified mode"""
    if mode is None:
        mode = CURRENT_LOGGING_MODE

    configs = {
        'PRODUCTION': PRODUCTION_LOGGING,
        'DEVELOPMENT': DEVELOPMENT_LOGGING,
        'DEBUG': DEBUG_LOGGING,
        'SILENT': SILENT_LOGGING,
        'TESTING': TESTING_LOGGING
    }

    config = dict(configs.get(mode.upper(), DEVELOPMENT_LOGGING))
    config['log_dir'] = LOG_DIR
    return config

def is_module_logging_enabled(module_name: str) -> bool:
    """Check if logging is enabled for a specific module"""
    return MODULE_LOGGING.get(module_name, True)

def enable_module_logging(module_name: str):
    """Enable logging for a specific module"""
    MODULE_LOGGING[module_name] = True

def disable_module_logging(module_name: str):
    """Disable logging for a specific module"""
    MODULE_LOGGING[module_name] = False
