"""Interactive prompts."""

from typing import Optional, Sequence

from InquirerPy import inquirer


class Prompter:
    """Ask the user for free text or one choice from a list."""

    def text(self, label: str, default: str = "") -> str:
        return inquirer.text(message=label, default=default or "").execute()

    def select(self, label: str, choices: Sequence[str], default: Optional[str] = None) -> str:
        """Return one of choices; default must be one of them or None."""
        if default is not None and default not in choices:
            default = None
        return inquirer.select(
            message=label,
            choices=list(choices),
            default=default,
        ).execute()
