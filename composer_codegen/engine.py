"""
Client-side view of the runtime engine entry points.

Each public method forwards to a chaincode transport. Two-argument methods
take the invocation context and a list of string arguments and declare the
names of those arguments with ``@engine_method``; four-argument methods
invoke a named function with string arguments. The Java ``Engine``
interface is generated from this class.
"""

from typing import Callable, Optional, Sequence

# (context, function name, string arguments[, transaction_id=...]) -> response
Transport = Callable[..., str]


class EngineError(Exception):
    """Raised when an engine entry point is called with the wrong arguments."""

    pass


def engine_method(*parameters: str):
    """Declare the string arguments a two-argument entry point expects."""

    def decorator(func):
        func.engine_parameters = tuple(parameters)
        return func

    return decorator


class ComposerEngine:
    """Forwards engine calls to a transport such as a chaincode connection."""

    def __init__(self, transport: Transport):
        """
        Args:
            transport: Callable receiving the context, the function name and the
                string arguments (plus a transaction_id keyword for invoke and
                query when one is given) and returning the string response
        """
        self.transport = transport

    def _call(
        self, context, function_name: str, args: Sequence[str], expected: Sequence[str]
    ) -> str:
        args = [str(arg) for arg in args]
        if len(args) != len(expected):
            raise EngineError(
                f'Invalid arguments "{args}" to function "{function_name}", '
                f'expecting "{list(expected)}"'
            )
        return self.transport(context, function_name, args)

    @engine_method()
    def ping(self, context, args):
        return self._call(context, "ping", args, self.ping.engine_parameters)

    @engine_method("serializedResource")
    def submit_transaction(self, context, args):
        return self._call(
            context, "submitTransaction", args, self.submit_transaction.engine_parameters
        )

    @engine_method("registryType", "registryId")
    def get_all_resources_in_registry(self, context, args):
        return self._call(
            context,
            "getAllResourcesInRegistry",
            args,
            self.get_all_resources_in_registry.engine_parameters,
        )

    @engine_method("registryType", "registryId", "resourceId")
    def get_resource_in_registry(self, context, args):
        return self._call(
            context,
            "getResourceInRegistry",
            args,
            self.get_resource_in_registry.engine_parameters,
        )

    @engine_method("queryType", "query", "parameters")
    def execute_query(self, context, args):
        return self._call(
            context, "executeQuery", args, self.execute_query.engine_parameters
        )

    def invoke(self, context, function_name: str, args: Sequence[str],
               transaction_id: Optional[str] = None):
        """Invoke a named engine function that may change world state."""
        return self._forward(context, "invoke", function_name, args, transaction_id)

    def query(self, context, function_name: str, args: Sequence[str],
              transaction_id: Optional[str] = None):
        """Invoke a named read-only engine function."""
        return self._forward(context, "query", function_name, args, transaction_id)

    def _forward(self, context, entry_point: str, function_name: str,
                 args: Sequence[str], transaction_id: Optional[str]) -> str:
        # the function name travels as the first string argument
        call_args = [function_name] + [str(arg) for arg in args]
        if transaction_id is None:
            return self.transport(context, entry_point, call_args)
        return self.transport(context, entry_point, call_args, transaction_id=transaction_id)
