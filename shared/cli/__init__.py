from shared.cli.base_cli import BaseCLI

__all__ = ["BaseCLI"]
