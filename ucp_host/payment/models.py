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

"""Payment handler data models."""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from ..constants import Constants


class BindingContext(BaseModel):
    """Context information for the binding/transport a payment arrived on."""
    transport: Literal["rest", "mcp", "a2a", "embedded"] = Constants.TRANSPORT_REST
    platform_profile_uri: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class PaymentCredential(BaseModel):
    """Payment credential provided by the platform (tokenized, never raw card data)."""
    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(..., description="Credential type, e.g. card or token")
    data: Dict[str, Any] = Field(default_factory=dict)
    schema_url: Optional[str] = Field(None, alias="schema", description="Schema URI for validation")


class PaymentInstrument(BaseModel):
    """A payment instrument ready for processing. Created per payment attempt."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: f"instr_{uuid4().hex}")
    type: str
    provider: str
    data: Dict[str, Any] = Field(default_factory=dict)
    schema_url: Optional[str] = Field(None, alias="schema")


class ProcessingStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    PENDING = "pending"
    REQUIRES_ACTION = "requires_action"


class ProcessingResult(BaseModel):
    """Result of payment processing."""
    status: ProcessingStatus
    transaction_id: Optional[str] = None
    message: Optional[str] = None
    data: Optional[Dict[str, Any]] = None


class PaymentHandlerDeclaration(BaseModel):
    """What a payment handler advertises to platforms."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Handler name in reverse-DNS format, e.g. com.google.pay")
    version: str = Constants.UCP_VERSION
    spec: Optional[str] = None
    config_schema: Optional[str] = None
    instrument_schemas: List[str] = Field(default_factory=list)
    config: Optional[Dict[str, Any]] = None

    def to_manifest(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
