# Copyright 2026 UCP Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Host settings loaded from the environment (and a .env file if present)."""

import os
from typing import List, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

from .constants import Constants
from .errors import ConfigurationError

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    value = env.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


class UCPSettings(BaseModel):
    """Transport switches and network settings for one host."""
    host: str = "localhost"
    port: int = 10999
    base_url: Optional[str] = Field(None, description="Public base URL, defaults to http://host:port")
    rest_enabled: bool = True
    mcp_enabled: bool = False
    a2a_enabled: bool = False
    embedded_enabled: bool = False
    log_level: str = "INFO"

    @model_validator(mode="after")
    def check_rest_binding(self) -> "UCPSettings":
        # REST is the mandatory UCP binding
        if not self.rest_enabled:
            raise ConfigurationError("The REST transport binding cannot be disabled")
        return self

    @property
    def public_url(self) -> str:
        return (self.base_url or f"http://{self.host}:{self.port}").rstrip("/")

    def enabled_transports(self) -> List[str]:
        transports = [Constants.TRANSPORT_REST]
        if self.mcp_enabled:
            transports.append(Constants.TRANSPORT_MCP)
        if self.a2a_enabled:
            transports.append(Constants.TRANSPORT_A2A)
        if self.embedded_enabled:
            transports.append(Constants.TRANSPORT_EMBEDDED)
        return transports

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "UCPSettings":
        """Build settings from `env` (defaults to os.environ after loading .env)."""
        if env is None:
            load_dotenv()
            env = os.environ
        return cls(
            host=env.get("UCP_HOST", "localhost"),
            port=int(env.get("UCP_PORT", "10999")),
            base_url=env.get("UCP_BASE_URL") or None,
            rest_enabled=_env_flag(env, "UCP_REST_ENABLED", True),
            mcp_enabled=_env_flag(env, "UCP_MCP_ENABLED", False),
            a2a_enabled=_env_flag(env, "UCP_A2A_ENABLED", False),
            embedded_enabled=_env_flag(env, "UCP_EMBEDDED_ENABLED", False),
            log_level=env.get("UCP_LOG_LEVEL", "INFO").upper(),
        )
