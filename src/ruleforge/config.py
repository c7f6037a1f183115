"""Engine configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ruleforge.i18n.localizer import Localizer


@dataclass
class EngineConfig:
    """Localization settings for the validation engine.

    Attributes:
        locale: Locale used for engine messages (e.g. "en", "fr")
        fallback_locale: Locale consulted when a key is missing in `locale`
        messages_dir: Optional directory of `<locale>.yaml` files that
            override or extend the bundled message catalogues
    """

    locale: str = "en"
    fallback_locale: str = "en"
    messages_dir: Path | None = None

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Create config from environment variables.

        Resolution order for each setting:
        1. RULEFORGE_LOCALE / RULEFORGE_FALLBACK_LOCALE / RULEFORGE_MESSAGES_DIR
        2. Defaults: "en", "en", no extra messages directory
        """
        messages_dir = os.environ.get("RULEFORGE_MESSAGES_DIR")
        return cls(
            locale=os.environ.get("RULEFORGE_LOCALE") or "en",
            fallback_locale=os.environ.get("RULEFORGE_FALLBACK_LOCALE") or "en",
            messages_dir=Path(messages_dir) if messages_dir else None,
        )


def create_localizer(config: EngineConfig) -> Localizer:
    """Create a localizer from the engine configuration."""
    from ruleforge.i18n.localizer import Localizer

    return Localizer(
        locale=config.locale,
        fallback_locale=config.fallback_locale,
        messages_dir=config.messages_dir,
    )
