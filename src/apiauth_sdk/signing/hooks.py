"""
Before-send hook registry

A minimal extension point for hosts without their own middleware system.
Callbacks receive the outgoing request and run by descending priority, so a
callback registered with a low priority sees every header set before it.
"""

import logging
from typing import Callable, List, Tuple

from .types import SigningTarget
from .signer import ApiAuthSigner

logger = logging.getLogger(__name__)

BeforeSendCallback = Callable[[SigningTarget], None]

# The signer runs after header-mutating middleware registered at default priority
SIGNER_PRIORITY = -1000


class BeforeSendHooks:
    """Ordered collection of before-send callbacks"""

    def __init__(self):
        self._callbacks: List[Tuple[int, int, BeforeSendCallback]] = []
        self._sequence = 0

    def register(self, callback: BeforeSendCallback, priority: int = 0) -> None:
        """
        Register a callback.

        Args:
            callback: Callable receiving the outgoing request
            priority: Higher values run first; equal priorities keep
                registration order
        """
        self._callbacks.append((-priority, self._sequence, callback))
        self._callbacks.sort(key=lambda entry: (entry[0], entry[1]))
        self._sequence += 1
        logger.debug(f"Registered before-send callback {callback!r} at priority {priority}")

    def unregister(self, callback: BeforeSendCallback) -> bool:
        """Remove a callback; returns False if it was not registered."""
        for entry in self._callbacks:
            if entry[2] == callback:
                self._callbacks.remove(entry)
                return True
        return False

    def dispatch(self, request: SigningTarget) -> None:
        """Invoke every callback with the request, in priority order."""
        for _, _, callback in self._callbacks:
            callback(request)

    def __len__(self) -> int:
        return len(self._callbacks)


def register_signer(hooks: BeforeSendHooks, signer: ApiAuthSigner) -> None:
    """
    Register a signer as a before-send callback at the lowest priority.

    Args:
        hooks: Hook registry of the host client
        signer: Signer to run on every outgoing request
    """
    hooks.register(signer.sign, SIGNER_PRIORITY)
