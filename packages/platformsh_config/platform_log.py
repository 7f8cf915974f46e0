import logging
import re
import traceback
from datetime import datetime
from typing import Dict, Optional


class PlatformLogger:
    def __init__(self, name: str, baselogger=None, config=None, context: Optional[Dict] = None):
        self.name = name
        self.pattern = "%p: (%c) %m"
        self.config = config or {}
        self.log_level = (self.config.get("log_level", "") or "").lower()
        self.context = dict(context or {})
        self.logger = baselogger or logging.getLogger(name)

        # Lower numbers = higher priority
        self._level_hierarchy = {"error": 0, "warn": 1, "info": 2, "debug": 3}

        self._log_methods = {
            "debug": self.logger.debug,
            "info": self.logger.info,
            "warn": self.logger.warning,
            "error": self.logger.error,
        }

    def should_print(self):
        return self.config.get("print_logging", False)

    def debug(self, msg: str, exc_info: bool = False):
        self._log("debug", self._with_traceback(msg, exc_info))

    def info(self, msg: str, exc_info: bool = False):
        self._log("info", self._with_traceback(msg, exc_info))

    def warning(self, msg: str, exc_info: bool = False):
        self._log("warn", self._with_traceback(msg, exc_info))

    warn = warning

    def error(self, msg: str, exc_info: bool = False):
        self._log("error", self._with_traceback(msg, exc_info))

    def bind(self, **context) -> "PlatformLogger":
        """Return a logger sharing this one's settings with extra ``%x{key}`` values."""
        bound = PlatformLogger(
            self.name,
            baselogger=self.logger,
            config=self.config,
            context={**self.context, **context},
        )
        bound.pattern = self.pattern
        return bound

    def with_pattern(self, pattern: str):
        self.pattern = pattern
        return self

    def _with_traceback(self, msg: str, exc_info: bool) -> str:
        if exc_info:
            return f"{msg}\n{traceback.format_exc()}"
        return msg

    def _is_level_enabled(self, level: str) -> bool:
        if self.log_level != "":
            current_level_str = self.log_level
        else:
            current_level_str = str(logging.getLevelName(self.logger.getEffectiveLevel())).lower()
            if current_level_str == "warning":
                current_level_str = "warn"

        # Unknown levels (NOTSET, custom) let everything through
        if current_level_str not in self._level_hierarchy:
            return True

        return self._level_hierarchy[level] <= self._level_hierarchy[current_level_str]

    def _log(self, level: str, msg: str):
        if self._is_level_enabled(level):
            formatted_msg = self._format_msg(msg, level)
            self._log_methods[level](formatted_msg)

            if self.should_print():
                print(formatted_msg)

    def _format_msg(self, msg: str, level: str) -> str:
        """
        Format a log message according to the current pattern

        Supported patterns:
        %d{format} - Date (uses datetime strftime format)
        %p - Log level
        %c - Logger name
        %c{n} - Logger name truncated to last n components
        %m - Message
        %n - Newline
        %x{key} - Context value for key
        """
        result = self.pattern

        date_matches = re.findall(r"%d(?:{([^}]+)})?", result)
        if date_matches:
            now = datetime.now()
            for date_format in date_matches:
                if date_format:
                    result = result.replace(f"%d{{{date_format}}}", now.strftime(date_format))
                else:
                    result = result.replace("%d", now.isoformat(timespec="milliseconds"))

        for num_components in re.findall(r"%c(?:{(\d+)})?", result):
            if num_components:
                name = ".".join(self.name.split(".")[-int(num_components) :])
                result = result.replace(f"%c{{{num_components}}}", name)
            else:
                result = result.replace("%c", self.name)

        for key in re.findall(r"%x{([^}]+)}", result):
            value = self.context.get(key)
            result = result.replace(f"%x{{{key}}}", "n/a" if value is None else str(value))

        # The message goes in last so that a '%' inside it is never expanded
        result = result.replace("%p", level.upper()).replace("%n", "\n")
        return result.replace("%m", msg)
