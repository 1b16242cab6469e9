"""Mux configuration.

MuxConfig is a frozen dataclass, immutable after creation, with no
string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MuxConfig:
    """Mux configuration. Immutable after creation.

    Override what you need::

        mux = Mux(MuxConfig(debug=True))
    """

    # Log every dispatch decision at DEBUG level
    debug: bool = False

    # Logger receiving dispatch records when debug is enabled
    logger: str = "centra.mux"
