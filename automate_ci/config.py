"""Configuration for the test case tracker."""

import os
from collections.abc import Mapping

from pydantic import BaseModel

DEBUG_ENV_VAR = "BROWSERSTACK_AUTOMATE_DEBUG"
DEFAULT_TAG = "[BrowserStackAutomate]"


class TrackerConfig(BaseModel):
    """Configuration for matching local test cases to remote sessions."""

    tag: str = DEFAULT_TAG
    debug: bool = False

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] = os.environ, tag: str = DEFAULT_TAG
    ) -> "TrackerConfig":
        """Build config with the debug switch taken from the environment.

        Only the exact value "true" turns diagnostics on.
        """
        return cls(tag=tag, debug=environ.get(DEBUG_ENV_VAR, "false") == "true")
