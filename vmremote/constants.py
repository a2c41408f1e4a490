"""Global constants and defaults for the VM remote keyword server."""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8270

DEFAULT_LIBRARY = "vmremote.libraries.hypervisor"
DEFAULT_LIBRARY_CLASS = "VirtualMachineLibrary"
DEFAULT_DOC_FILE = Path(__file__).resolve().parent / "libraries" / "hypervisor_doc.xml"

# Environment variables read by config.parse_env()
ENV_LIBRARY = "REMOTE_LIBRARY"
ENV_LIBRARY_CLASS = "REMOTE_LIBRARY_CLASS"
ENV_DOC_FILE = "REMOTE_LIBRARY_DOC"

LIBVIRT_URI = os.environ.get("LIBVIRT_URI", "qemu:///system")
TRUTHY = {"1", "true", "yes", "on"}
FALSY = {"0", "false", "no", "off"}

_LOG_VERBOSE = os.environ.get("LOG_VERBOSE", "").lower() in TRUTHY

STATUS_PASS = "PASS"
STATUS_FAIL = "FAIL"

STOP_KEYWORD = "stop_remote_server"
SHUTDOWN_DELAY = 5.0
STOP_OUTPUT_ALLOWED = "NOTE: remote server shutting/shut down."
STOP_OUTPUT_DISABLED = (
    "NOTE: remote server not configured to allow remote shutdowns. Your request has been ignored."
)
STOP_KEYWORD_DOC = (
    "Remotely shut down remote server/library w/ Robot Framework keyword.\n\n"
    "If server is configured to not allow remote shutdown, keyword 'request' is ignored by server.\n\n"
    "Always returns status of PASS with return value of 1. Output value contains helpful info "
    "and may indicate whether remote shut down is allowed or not."
)

# Return-shape classification of a keyword
SHAPE_NONE = "none"
SHAPE_INT = "int"
SHAPE_STR = "str"
SHAPE_BOOL = "bool"
SHAPE_ARRAY_INT = "array-int"
SHAPE_ARRAY_STR = "array-str"
SHAPE_ARRAY_BOOL = "array-bool"
SHAPE_OTHER = "other"
SHAPE_DYNAMIC = "dynamic"  # no declared return type; classified from the value

SCALAR_SHAPES = {SHAPE_INT: int, SHAPE_STR: str, SHAPE_BOOL: bool}
ARRAY_SHAPES = {SHAPE_ARRAY_INT: int, SHAPE_ARRAY_STR: str, SHAPE_ARRAY_BOOL: bool}

# virDomainState values reported by virDomain.info()
DOMAIN_STATES = {
    0: "no state",
    1: "running",
    2: "blocked",
    3: "paused",
    4: "shutting down",
    5: "shut off",
    6: "crashed",
    7: "suspended",
}
