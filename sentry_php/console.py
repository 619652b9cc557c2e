"""Operator console - Interface and implementations for interactive prompts."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, Tuple

import click


class Console(ABC):
    """Abstract interface for operator I/O."""

    @abstractmethod
    def ask(self, question: str, default: Optional[str] = None) -> Optional[str]:
        """Ask a free-form question. Blank answers return the default (or None)."""
        pass

    @abstractmethod
    def secret(self, question: str) -> str:
        """Ask for a value without echoing it."""
        pass

    @abstractmethod
    def confirm(self, question: str, default: bool = False) -> bool:
        """Ask a yes/no question."""
        pass

    @abstractmethod
    def choice(self, question: str, options: Sequence[str], default: Optional[str] = None) -> int:
        """Single choice from a list. Returns the index of the chosen option."""
        pass

    @abstractmethod
    def info(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        pass

    def mini_task(self, label: str, detail: str) -> None:
        """One-line status such as 'Using existing key from .env'."""
        self.info(f"{label} {detail}")

    def new_line(self) -> None:
        self.info("")


class ClickConsole(Console):
    """Terminal console built on click prompts."""

    def ask(self, question: str, default: Optional[str] = None) -> Optional[str]:
        answer = click.prompt(
            question,
            default=default if default is not None else '',
            show_default=default is not None,
        )
        answer = answer.strip()
        return answer or None

    def secret(self, question: str) -> str:
        return click.prompt(question, hide_input=True).strip()

    def confirm(self, question: str, default: bool = False) -> bool:
        return click.confirm(question, default=default)

    def choice(self, question: str, options: Sequence[str], default: Optional[str] = None) -> int:
        if not options:
            raise ValueError(f"No options to choose from for '{question}'")

        click.echo(question)
        for number, option in enumerate(options, start=1):
            click.echo(f"  [{number}] {option}")

        default_number = options.index(default) + 1 if default in options else None
        number = click.prompt(
            'Choice',
            type=click.IntRange(1, len(options)),
            default=default_number,
        )
        return number - 1

    def info(self, message: str) -> None:
        click.echo(message)

    def error(self, message: str) -> None:
        click.echo(click.style(message, fg='red'), err=True)

    def mini_task(self, label: str, detail: str) -> None:
        click.echo(f"{label} {click.style(detail, fg='green')}")


# Scripted answer meaning "accept the prompt's default"
USE_DEFAULT = object()


class ScriptedConsole(Console):
    """Console that replays scripted answers. Used by tests."""

    def __init__(self, answers: Optional[List[Any]] = None):
        self.answers = list(answers or [])
        self.prompts: List[Tuple[str, str, Optional[Sequence[str]], Any]] = []
        self.messages: List[str] = []
        self.errors: List[str] = []

    def _next(self, kind: str, question: str, options: Optional[Sequence[str]], default: Any) -> Any:
        self.prompts.append((kind, question, options, default))
        if not self.answers:
            raise AssertionError(f"Unexpected {kind} prompt: {question}")
        answer = self.answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer

    def ask(self, question: str, default: Optional[str] = None) -> Optional[str]:
        answer = self._next('ask', question, None, default)
        if answer is USE_DEFAULT or answer is None or answer == '':
            return default
        return str(answer)

    def secret(self, question: str) -> str:
        return self._next('secret', question, None, None)

    def confirm(self, question: str, default: bool = False) -> bool:
        answer = self._next('confirm', question, None, default)
        return default if answer is USE_DEFAULT else bool(answer)

    def choice(self, question: str, options: Sequence[str], default: Optional[str] = None) -> int:
        answer = self._next('choice', question, list(options), default)
        if answer is USE_DEFAULT:
            if default not in options:
                raise AssertionError(f"No default for choice prompt: {question}")
            return list(options).index(default)
        if isinstance(answer, str):
            return list(options).index(answer)
        return answer

    def info(self, message: str) -> None:
        self.messages.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)

    def questions(self, kind: Optional[str] = None) -> List[str]:
        """Test helper returning asked questions, optionally filtered by kind."""
        return [q for k, q, _, _ in self.prompts if kind is None or k == kind]
