# bgsearch/utils/logging.py

import sys
from datetime import datetime

from colorama import Fore, Style

from bgsearch.config import settings

LEVELS = {"DEBUG": 10, "INFO": 20, "SUCCESS": 25, "WARNING": 30, "ERROR": 40}


def timestamp() -> str:
    return f"[{datetime.now():%Y-%m-%d %H:%M:%S}]"


def enabled(level: str) -> bool:
    threshold = LEVELS.get(settings.LOG_LEVEL.upper(), LEVELS["INFO"])
    return LEVELS[level] >= threshold


def _emit(level: str, color: str, msg: str):
    if not enabled(level):
        return
    print(color + f"{timestamp()} [{level}] {msg}" + Style.RESET_ALL, file=sys.stderr)

def log_debug(msg: str):
    _emit("DEBUG", Fore.WHITE, msg)

def log_info(msg: str):
    _emit("INFO", Fore.CYAN, msg)

def log_success(msg: str):
    _emit("SUCCESS", Fore.GREEN, msg)

def log_warning(msg: str):
    _emit("WARNING", Fore.YELLOW, msg)

def log_error(msg: str):
    _emit("ERROR", Fore.RED, msg)
