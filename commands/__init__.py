"""
Migration Validator Commands Package

Individual command implementations using the CommandRegistry pattern.
Each command is defined in its own file and self-registers via decorator.
"""
# Commands are imported to trigger registration
# Registration order is the order shown in --help

from . import validate
from . import list_repos
from . import show_config
