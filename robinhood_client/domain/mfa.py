from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

MfaCallback = Callable[[str], str]


@runtime_checkable
class MfaCodeProvider(Protocol):
    def get_code(self, mfa_type: str) -> str: ...


class CallbackMfaCodeProvider:
    """Adapts a plain ``(mfa_type) -> code`` function."""

    def __init__(self, callback: MfaCallback) -> None:
        self._callback = callback

    def get_code(self, mfa_type: str) -> str:
        return self._callback(mfa_type)


class PromptMfaCodeProvider:
    """Asks for the code on the terminal. Blocks until a line is entered."""

    def __init__(self, prompt: Callable[[str], str] = input) -> None:
        self._prompt = prompt

    def get_code(self, mfa_type: str) -> str:
        return self._prompt(f"Please enter MFA code from {mfa_type}: ").strip()


def as_mfa_provider(source: MfaCodeProvider | MfaCallback) -> MfaCodeProvider:
    if isinstance(source, MfaCodeProvider):
        return source
    if callable(source):
        return CallbackMfaCodeProvider(source)
    raise TypeError("mfa provider must implement get_code(mfa_type) or be callable")
