# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .request_logger import REQUEST_ID_HEADER, configure_request_logging
from .security_headers import configure_security_headers

__all__ = ["REQUEST_ID_HEADER", "configure_request_logging", "configure_security_headers"]
