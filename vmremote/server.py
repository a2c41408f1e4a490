"""XML-RPC transport for the remote keyword library API."""

from __future__ import annotations

import sys
from typing import Any, Dict, List, Optional, Sequence
from xmlrpc.server import SimpleXMLRPCRequestHandler, SimpleXMLRPCServer

from vmremote.docs import DocumentationResolver, load_documentation
from vmremote.exceptions import RemoteServerError, UnsupportedArgumentError
from vmremote.library import KeywordLibrary, load_library
from vmremote.models import ServerConfig
from vmremote.runner import KeywordRunner
from vmremote.utils import log


class RemoteLibraryService:
    """The four remote library API methods, routed by name."""

    def __init__(
        self,
        library: KeywordLibrary,
        runner: KeywordRunner,
        resolver: DocumentationResolver,
    ) -> None:
        self.library = library
        self.runner = runner
        self.resolver = resolver
        self._methods = {
            "get_keyword_names": self.get_keyword_names,
            "get_keyword_arguments": self.get_keyword_arguments,
            "get_keyword_documentation": self.get_keyword_documentation,
            "run_keyword": self.run_keyword,
        }

    def _dispatch(self, method: str, params: Sequence[Any]) -> Any:
        handler = self._methods.get(method)
        if handler is None:
            raise RemoteServerError(f'method "{method}" is not supported')
        return handler(*params)

    def get_keyword_names(self) -> List[str]:
        return self.library.keyword_names()

    def get_keyword_arguments(self, name: str) -> List[str]:
        return self.library.keyword_arguments(name)

    def get_keyword_documentation(self, name: str) -> str:
        return self.resolver.describe(name)

    def run_keyword(self, name: str, args: Sequence[Any] = ()) -> Dict[str, str]:
        if not isinstance(args, (list, tuple)):
            raise UnsupportedArgumentError(f"Keyword arguments must be an array (got {type(args).__name__})")
        return self.runner.run_keyword(name, args).to_dict()


def build_service(config: ServerConfig) -> RemoteLibraryService:
    """Load the keyword library and its documentation for ``config``.

    A library that cannot be loaded raises LibraryLoadError; unreadable
    documentation only disables keyword documentation.
    """
    library = load_library(config.library, config.library_class)
    source = load_documentation(config.doc_file)
    runner = KeywordRunner(library, allow_stop=config.allow_stop, shutdown_delay=config.shutdown_delay)
    return RemoteLibraryService(library, runner, DocumentationResolver(source, library.name))


class _RequestHandler(SimpleXMLRPCRequestHandler):
    rpc_paths = ("/", "/RPC2")

    def log_message(self, format: str, *args: Any) -> None:
        log("DEBUG", f"{self.address_string()} {format % args}")


class RemoteServer(SimpleXMLRPCServer):
    """Single-threaded XML-RPC server; requests are handled one at a time."""

    allow_reuse_address = True

    def __init__(self, host: str, port: int, service: RemoteLibraryService) -> None:
        super().__init__((host, port), requestHandler=_RequestHandler, logRequests=True, allow_none=False)
        self.service = service
        self.register_instance(service)

    @property
    def port(self) -> int:
        return self.server_address[1]

    def handle_error(self, request, client_address) -> None:
        exc = sys.exc_info()[1]
        log("WARN", f"Request from {client_address[0]}:{client_address[1]} aborted: {exc}")


def create_server(config: ServerConfig, service: Optional[RemoteLibraryService] = None) -> RemoteServer:
    if service is None:
        service = build_service(config)
    return RemoteServer(config.host, config.port, service)
