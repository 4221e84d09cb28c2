"""
Completion service that communicates with editors via stdio.

Reads one JSON-RPC request per line from stdin and writes one response per
line to stdout. Logs never go to stdout, which carries the protocol.
"""

import json
import logging
import sys
from typing import Any, Dict, Optional

from layoutassist.completion.provider import LayoutAttributeCompletionProvider
from layoutassist.config import Config
from layoutassist.dom.document import DOMDocument
from layoutassist.errors import InvalidRequestError, LayoutAssistError
from layoutassist.lsp.protocol import CompletionParams, JSONRPCMessage, LSPErrorCodes
from layoutassist.utils.logger import logger as request_logger

logger = logging.getLogger(__name__)


class CompletionService:
    """
    Attribute completion service that handles requests via JSON-RPC over stdio.
    """

    def __init__(
        self,
        provider: Optional[LayoutAttributeCompletionProvider] = None,
        config: Optional[Config] = None,
    ):
        """
        Initialize completion service.

        Args:
            provider: Completion provider (built from config when omitted)
            config: Configuration used to build or rebuild the provider
        """
        self.config = config or Config()
        self.provider = provider or LayoutAttributeCompletionProvider.from_config(self.config)
        self.requests_served = 0
        logger.info(f"Completion service initialized with {len(self.provider.widgets)} widgets")

    def handle_request(self, request_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Handle a JSON-RPC request.

        Args:
            request_data: Parsed JSON-RPC request

        Returns:
            Response dictionary
        """
        if not isinstance(request_data, dict):
            return json.loads(JSONRPCMessage.error(
                code=LSPErrorCodes.InvalidRequest,
                message="Request must be a JSON object",
                id=None
            ))

        method = request_data.get('method')
        params = request_data.get('params') or {}
        request_id = request_data.get('id')

        logger.debug(f"Handling request: method={method}, id={request_id}")

        try:
            if method == 'complete':
                result = self._handle_complete(params)
            elif method == 'getStats':
                result = self._handle_get_stats()
            elif method == 'reload':
                result = self._handle_reload()
            elif method == 'ping':
                result = {'status': 'ok'}
            else:
                return json.loads(JSONRPCMessage.error(
                    code=LSPErrorCodes.MethodNotFound,
                    message=f"Method not found: {method}",
                    id=request_id
                ))

            return json.loads(JSONRPCMessage.response(result, request_id))

        except InvalidRequestError as e:
            logger.info(f"Invalid completion request: {e}")
            return json.loads(JSONRPCMessage.error(
                code=LSPErrorCodes.InvalidParams,
                message=str(e),
                id=request_id
            ))
        except Exception as e:
            request_logger.error("service", f"Error handling {method} request", e)
            return json.loads(JSONRPCMessage.error(
                code=LSPErrorCodes.InternalError,
                message=str(e),
                id=request_id
            ))

    def _handle_complete(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Handle complete request.

        Args:
            params: ``content`` plus either ``offset`` or ``cursor``

        Returns:
            LSP completion list
        """
        content = params.get('content')
        if not isinstance(content, str):
            raise InvalidRequestError("'content' must be a string")

        document = DOMDocument.parse(content)
        result = self.provider.complete(CompletionParams.from_dict(params), document)
        self.requests_served += 1
        return result.to_dict()

    def _handle_get_stats(self) -> Dict[str, Any]:
        """
        Handle getStats request.

        Returns:
            Statistics about the service
        """
        registry = self.provider.registry
        return {
            'widgets': len(self.provider.widgets),
            'namespaces': registry.namespaces(),
            'tables': len(registry.all_tables()),
            'requests_served': self.requests_served,
        }

    def _handle_reload(self) -> Dict[str, Any]:
        """
        Handle reload request: re-read widget and resource tables from disk.

        The files named by the current configuration are read again, so paths
        given on the command line survive a reload.

        Returns:
            Success result
        """
        logger.info("Reloading widget and resource tables")
        try:
            self.provider = LayoutAttributeCompletionProvider.from_config(self.config)
        except LayoutAssistError as e:
            logger.error(f"Reload failed, keeping previous tables: {e}")
            return {'status': 'error', 'message': str(e)}
        return {'status': 'ok', 'widgets': len(self.provider.widgets)}

    def run(self, stdin=None, stdout=None):
        """
        Run the service loop, reading from stdin and writing to stdout.
        """
        stdin = stdin or sys.stdin
        stdout = stdout or sys.stdout
        logger.info("Starting completion service loop")

        try:
            while True:
                line = stdin.readline()

                if not line:
                    logger.info("EOF received, shutting down")
                    break

                line = line.strip()
                if not line:
                    continue

                logger.debug(f"Received: {line[:100]}...")

                try:
                    request_data = json.loads(line)
                    response_str = json.dumps(self.handle_request(request_data))
                except json.JSONDecodeError as e:
                    logger.error(f"Invalid JSON: {e}")
                    response_str = JSONRPCMessage.error(
                        code=LSPErrorCodes.ParseError,
                        message="Parse error",
                        id=None
                    )

                print(response_str, file=stdout, flush=True)
                logger.debug(f"Sent: {response_str[:100]}...")

        except KeyboardInterrupt:
            logger.info("Service interrupted by user")
        finally:
            logger.info("Completion service shutting down")
