"""Pytest configuration for the tscatalog test suite.

Hypothesis profiles:
- dev: Local development with 500 examples
- ci: CI runs with 50 examples, derandomized
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- HYPOTHESIS_PROFILE env var -> explicit override
- CI=true environment variable -> "ci" profile
- Otherwise -> "dev" profile

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Pick the Hypothesis profile for this run.

    Priority:
    1. HYPOTHESIS_PROFILE env var
    2. CI=true env var
    3. "dev"
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# SHARED DOCUMENTS
# =============================================================================

# Excerpt of a German catalog as lupdate writes it.
GERMAN_CATALOG = """\
<?xml version="1.0" encoding="utf-8"?>
<!DOCTYPE TS>
<TS version="2.1" language="de_DE">
<context>
    <name>NetworkPage</name>
    <message>
        <location filename="../src/ui/NetworkPage.qml" line="212"/>
        <location line="+95"/>
        <source>NetworkPage --- Split Tunnel</source>
        <translation>Tunnel teilen</translation>
    </message>
    <message>
        <location line="+12"/>
        <source>NetworkPage --- Set Custom DNS...</source>
        <translation>Eigenes DNS festlegen...</translation>
    </message>
    <message>
        <location line="+8"/>
        <source>NetworkPage --- Name Servers</source>
        <translation type="unfinished"></translation>
    </message>
</context>
<context>
    <name>AccountPage</name>
    <message>
        <location filename="../src/ui/AccountPage.qml" line="40"/>
        <source>AccountPage --- (expired on %1)</source>
        <translation>(am %1 abgelaufen)</translation>
    </message>
    <message numerus="yes">
        <location line="+7"/>
        <source>AccountPage --- %n day(s) left</source>
        <translation>
            <numerusform>Noch %n Tag</numerusform>
            <numerusform>Noch %n Tage</numerusform>
        </translation>
    </message>
    <message>
        <source>AccountPage --- Renew</source>
        <translation type="obsolete">Verlängern</translation>
    </message>
</context>
<context>
    <name>ClientNotifications</name>
    <message>
        <location filename="../src/client/notifications.cpp" line="88"/>
        <source>ClientNotifications --- Connected using %1 port %2.</source>
        <translation>Mit %1 Port %2 verbunden.</translation>
    </message>
    <message>
        <location line="+4"/>
        <source>Close</source>
        <comment>dialog button</comment>
        <translation>Schließen</translation>
    </message>
    <message>
        <location line="+2"/>
        <source>Close</source>
        <translation>Beenden</translation>
    </message>
</context>
</TS>
"""

# Same source strings in a regional variant that only overrides a few.
AUSTRIAN_CATALOG = """\
<?xml version="1.0" encoding="utf-8"?>
<!DOCTYPE TS>
<TS version="2.1" language="de_AT">
<context>
    <name>NetworkPage</name>
    <message>
        <source>NetworkPage --- Split Tunnel</source>
        <translation>Tunnel aufteilen</translation>
    </message>
</context>
</TS>
"""


@pytest.fixture
def german_document() -> str:
    """German catalog excerpt as document text."""
    return GERMAN_CATALOG


@pytest.fixture
def austrian_document() -> str:
    """Austrian catalog overriding one German translation."""
    return AUSTRIAN_CATALOG
