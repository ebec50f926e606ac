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

"""
UCP Host Error Taxonomy

- Configuration errors: detected once while the host starts, never retried.
- Lookup errors: recoverable per request ("not found" / "bad request").
- Payment errors: raised by handlers during the acquire -> process flow.
- Downstream processing errors: business logic failures, sanitized before
  they reach the wire.
"""

from enum import Enum
from typing import Iterable, Optional


class UCPErrorCode(str, Enum):
    """Error codes surfaced by the host."""
    INVALID_VERSION_FORMAT = "invalid_version_format"
    MULTIPLE_BUSINESS_IDENTITIES = "multiple_business_identities"
    MULTIPLE_CAPABILITY_PROVIDERS = "multiple_capability_providers"
    TRANSPORT_REQUIREMENT_VIOLATED = "transport_requirement_violated"
    INVALID_CONFIGURATION = "invalid_configuration"
    NO_BUSINESS_IDENTITY = "no_business_identity"
    UNKNOWN_PAYMENT_HANDLER = "unknown_payment_handler"
    INSTRUMENT_ACQUISITION_FAILED = "instrument_acquisition_failed"
    PROCESSING_ERROR = "processing_error"


class UCPError(Exception):
    """Base class for all host errors."""
    code: UCPErrorCode = UCPErrorCode.PROCESSING_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ============================================================================
# Configuration errors
# ============================================================================

class ConfigurationError(UCPError):
    """The host is mis-configured and must not serve traffic."""
    code = UCPErrorCode.INVALID_CONFIGURATION


class InvalidVersionFormat(ConfigurationError):
    code = UCPErrorCode.INVALID_VERSION_FORMAT

    def __init__(self, version: str, capability: Optional[str] = None):
        target = f" for capability {capability}" if capability else ""
        super().__init__(
            f"Invalid version format '{version}'{target}: expected YYYY-MM-DD"
        )
        self.version = version
        self.capability = capability


class MultipleBusinessIdentities(ConfigurationError):
    code = UCPErrorCode.MULTIPLE_BUSINESS_IDENTITIES

    def __init__(self, units: Iterable[str]):
        self.units = sorted(units)
        super().__init__(
            "Only one business identity is allowed per host, found: "
            + ", ".join(self.units)
        )


class MultipleCapabilityProviders(ConfigurationError):
    code = UCPErrorCode.MULTIPLE_CAPABILITY_PROVIDERS

    def __init__(self, units: Iterable[str]):
        self.units = sorted(units)
        super().__init__(
            "Only one primary capability provider is allowed per host, found: "
            + ", ".join(self.units)
        )


class TransportRequirementViolated(ConfigurationError):
    code = UCPErrorCode.TRANSPORT_REQUIREMENT_VIOLATED

    def __init__(self, unit: str):
        super().__init__(
            f"Unit {unit} declares capabilities but is not reachable over the REST binding"
        )
        self.unit = unit


# ============================================================================
# Lookup errors
# ============================================================================

class UCPLookupError(UCPError):
    """A per-request lookup missed."""


class NoBusinessIdentity(UCPLookupError):
    code = UCPErrorCode.NO_BUSINESS_IDENTITY

    def __init__(self):
        super().__init__("No UCP business identity is declared on this host")


class UnknownPaymentHandler(UCPLookupError):
    code = UCPErrorCode.UNKNOWN_PAYMENT_HANDLER

    def __init__(self, name: str):
        super().__init__(f"Payment handler {name} is not registered")
        self.name = name


# ============================================================================
# Payment and downstream errors
# ============================================================================

class PaymentError(UCPError):
    """Raised by payment handlers."""


class InstrumentAcquisitionFailed(PaymentError):
    code = UCPErrorCode.INSTRUMENT_ACQUISITION_FAILED

    def __init__(self, handler: str, schema: Optional[str]):
        super().__init__(
            f"Payment handler {handler} does not support credential schema {schema}"
        )
        self.handler = handler
        self.schema = schema


class DownstreamProcessingError(UCPError):
    """
    Business logic failed while serving a capability call.

    `message` is safe to return to the caller; `cause` is only logged.
    """
    code = UCPErrorCode.PROCESSING_ERROR

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
