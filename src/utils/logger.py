"""
Centralized logging module for the EV trip planner
Provides easy on/off switching and consistent logging across all modules
"""

import logging
import os
import sys
from datetime import datetime
from typing import Optional, Dict, Any

from config.logging_config import is_module_logging_enabled


class ModuleSwitchFilter(logging.Filter):
    """Drops records while the module is switched off in MODULE_LOGGING"""

    def __init__(self, module_name: str):
        super().__init__()
        self.module_name = module_name

    def filter(self, record: logging.LogRecord) -> bool:
        return is_module_logging_enabled(self.module_name)


class EVTripLogger:
    """
    Centralized logger for the EV trip planner
    Provides easy switching between different logging levels and outputs
    """

    def __init__(self,
                 log_level: str = "INFO",
                 enable_console: bool = True,
                 enable_file: bool = False,
                 log_dir: str = "debug_logs",
                 log_format: str = "detailed"):
        """
        Initialize the logger

        Args:
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            enable_console: Whether to log to console
            enable_file: Whether to log to files
            log_dir: Directory for log files
            log_format: Log format style ("simple", "detailed", "minimal")
        """
        self.log_level = getattr(logging, log_level.upper())
        self.enable_console = enable_console
        self.enable_file = enable_file
        self.log_dir = log_dir
        self.log_format = log_format

        # Create log directory if needed
        if self.enable_file:
            os.makedirs(self.log_dir, exist_ok=True)

        self._setup_loggers()

    def _setup_loggers(self):
        """Setup the root planner logger with proper configuration"""

        self.logger = logging.getLogger('ev_trip')
        self.logger.setLevel(self.log_level)

        # Clear any existing handlers
        self.logger.handlers.clear()

        if self.log_format == "detailed":
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
            )
        elif self.log_format == "simple":
            formatter = logging.Formatter(
                '%(levelname)s - %(message)s'
            )
        else:  # minimal
            formatter = logging.Formatter('%(message)s')

        if self.enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(self.log_level)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if self.enable_file:
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            log_file = os.path.join(self.log_dir, f'ev_trip_{timestamp}.log')

            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(self.log_level)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

            self.log_file = log_file
        else:
            self.log_file = None

    def get_logger(self, name: str = None) -> logging.Logger:
        """Get a logger instance for a specific module"""
        if not name:
            return self.logger
        module_logger = logging.getLogger(f'ev_trip.{name}')
        if not any(isinstance(f, ModuleSwitchFilter) for f in module_logger.filters):
            module_logger.addFilter(ModuleSwitchFilter(name))
        return module_logger

    def info(self, message: str, module: str = None):
        self.get_logger(module).info(message)

    def print_summary(self, title: str, data: Dict[str, Any]):
        """Print a formatted summary"""
        if not self.enable_console:
            return

        print(f"\n{'='*50}")
        print(title)
        print(f"{'='*50}")

        for key, value in data.items():
            if isinstance(value, float):
                print(f"  {key}: {value:,.1f}")
            elif isinstance(value, int) and value >= 1000:
                print(f"  {key}: {value:,}")
            else:
                print(f"  {key}: {value}")

        print(f"{'='*50}")

    def log_route_failure(self, origin, destination, reason: str,
                          waypoints=None, extra: str = None):
        """Log route lookup failures to a dedicated file"""
        self.logger.error(f"Route failure {origin} -> {destination}: {reason}")
        if not self.enable_file:
            return

        failure_log_file = os.path.join(self.log_dir, "route_failures.log")

        with open(failure_log_file, 'a', encoding='utf-8') as f:
            f.write(f"\n{'='*60}\n")
            f.write(f"ROUTE FAILURE: {datetime.now().isoformat()}\n")
            f.write(f"Reason: {reason}\n")
            f.write(f"Origin: {origin}\n")
            f.write(f"Destination: {destination}\n")
            if waypoints:
                f.write(f"Waypoints: {waypoints}\n")
            if extra:
                f.write(f"Extra: {extra}\n")
            f.write(f"{'='*60}\n")

    def get_status(self) -> Dict[str, Any]:
        """Get current logger status"""
        return {
            'log_level': logging.getLevelName(self.log_level),
            'enable_console': self.enable_console,
            'enable_file': self.enable_file,
            'log_dir': self.log_dir,
            'log_format': self.log_format,
            'log_file': self.log_file,
        }


# Global logger instance
_global_logger: Optional[EVTripLogger] = None

def get_global_logger() -> EVTripLogger:
    """Get the global logger instance"""
    global _global_logger
    if _global_logger is None:
        _global_logger = EVTripLogger()
    return _global_logger

def get_logger(name: str = None) -> logging.Logger:
    """Get a module logger from the global instance"""
    return get_global_logger().get_logger(name)

def setup_logger(**kwargs) -> EVTripLogger:
    """Setup the global logger with custom configuration"""
    global _global_logger
    _global_logger = EVTripLogger(**kwargs)
    return _global_logger

# Convenience functions
def info(message: str, module: str = None):
    get_global_logger().info(message, module)

def print_summary(title: str, data: Dict[str, Any]):
    get_global_logger().print_summary(title, data)

def log_route_failure(origin, destination, reason: str, waypoints=None, extra: str = None):
    get_global_logger().log_route_failure(origin, destination, reason, waypoints, extra)
