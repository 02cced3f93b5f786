"""
Migration Validator Command Registry

Provides decorator-based command registration for self-registering commands.
Commands register themselves when their module is imported, so each
subcommand lives in a single file under commands/.

Usage:
    @CommandRegistry.register(
        name="list",
        help="List repository pairs",
        arguments=[
            {"flags": ["--source-root"], "help": "SVN repository root"},
        ],
    )
    def cmd_list(args) -> int:
        # Command implementation
        return 0
"""
from dataclasses import dataclass, field
from typing import (
    Optional, List, Dict, Any, Callable, Union
)
import argparse


# Type for command handler functions
CommandHandler = Callable[[Any], int]  # Takes args, returns exit code


@dataclass
class ArgumentSpec:
    """Specification for a command argument."""
    flags: List[str]  # e.g., ["repos"] or ["--report", "-r"]
    help: str = ""
    action: Optional[str] = None  # e.g., "store_true"
    nargs: Optional[str] = None  # e.g., "*" for zero or more
    default: Any = None
    metavar: Optional[str] = None
    type: Optional[Callable[[str], Any]] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ArgumentSpec":
        """Create ArgumentSpec from dictionary."""
        return cls(
            flags=d.get("flags", []),
            help=d.get("help", ""),
            action=d.get("action"),
            nargs=d.get("nargs"),
            default=d.get("default"),
            metavar=d.get("metavar"),
            type=d.get("type"),
        )

    def add_to_parser(self, parser: argparse.ArgumentParser) -> None:
        """Add this argument to an argparse parser."""
        kwargs = {"help": self.help}

        if self.action:
            kwargs["action"] = self.action
        if self.nargs:
            kwargs["nargs"] = self.nargs
        if self.default is not None:
            kwargs["default"] = self.default
        if self.metavar:
            kwargs["metavar"] = self.metavar
        if self.type:
            kwargs["type"] = self.type

        parser.add_argument(*self.flags, **kwargs)


@dataclass
class CommandSpec:
    """
    Specification for a registered command.

    Attributes:
        name: Command name (e.g., "validate")
        handler: Function that implements the command
        help: Help text for the command
        arguments: List of argument specifications
    """
    name: str
    handler: CommandHandler
    help: str = ""
    arguments: List[ArgumentSpec] = field(default_factory=list)


class CommandRegistry:
    """
    Registry for command handlers.

    Provides decorator-based registration and argparse subparser generation.
    """

    # Class-level storage for registered commands
    _commands: Dict[str, CommandSpec] = {}
    _registration_order: List[str] = []

    @classmethod
    def register(
        cls,
        name: str,
        help: str = "",
        arguments: Optional[List[Union[ArgumentSpec, Dict[str, Any]]]] = None,
    ) -> Callable[[CommandHandler], CommandHandler]:
        """
        Decorator to register a command handler.

        Args:
            name: Command name
            help: Help text
            arguments: List of ArgumentSpec or dicts

        Returns:
            Decorator function
        """
        def decorator(func: CommandHandler) -> CommandHandler:
            arg_specs = []
            for arg in arguments or []:
                if isinstance(arg, ArgumentSpec):
                    arg_specs.append(arg)
                else:
                    arg_specs.append(ArgumentSpec.from_dict(arg))

            cls._commands[name] = CommandSpec(
                name=name,
                handler=func,
                help=help,
                arguments=arg_specs,
            )
            if name not in cls._registration_order:
                cls._registration_order.append(name)

            return func

        return decorator

    @classmethod
    def get_command(cls, name: str) -> Optional[CommandSpec]:
        """Get a command specification by name."""
        return cls._commands.get(name)

    @classmethod
    def get_all_commands(cls) -> List[CommandSpec]:
        """Get all registered commands in registration order."""
        return [cls._commands[name] for name in cls._registration_order if name in cls._commands]

    @classmethod
    def get_handler(cls, name: str) -> Optional[CommandHandler]:
        """Get a command handler by name."""
        spec = cls.get_command(name)
        return spec.handler if spec else None

    @classmethod
    def build_subparsers(
        cls,
        parent_parser: argparse.ArgumentParser
    ) -> argparse._SubParsersAction:
        """
        Build argparse subparsers for all registered commands.

        Args:
            parent_parser: Parent ArgumentParser to add subparsers to

        Returns:
            SubParsers action object
        """
        subparsers = parent_parser.add_subparsers(dest="command", help="Command to run")

        for spec in cls.get_all_commands():
            parser = subparsers.add_parser(spec.name, help=spec.help)
            for arg in spec.arguments:
                arg.add_to_parser(parser)

        return subparsers

    @classmethod
    def execute(cls, args: argparse.Namespace) -> int:
        """
        Execute the command specified in args.

        Returns:
            Exit code from command handler
        """
        if not args.command:
            return 1

        handler = cls.get_handler(args.command)
        if not handler:
            print(f"Error: Unknown command '{args.command}'")
            return 1

        return handler(args)

    @classmethod
    def clear(cls) -> None:
        """Clear all registered commands. Primarily for testing."""
        cls._commands.clear()
        cls._registration_order.clear()

    @classmethod
    def command_count(cls) -> int:
        """Get the number of registered commands."""
        return len(cls._commands)
