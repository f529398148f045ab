"""Explicit registry of known clients."""

from sx.clients.base import Client
from sx.core.errors import UnknownClientError


class ClientRegistry:
    """Clients known to this run, in registration order.

    Built once per invocation and passed through the context rather than
    populated as an import side effect.
    """

    def __init__(self, clients: list[Client] | None = None) -> None:
        self._clients: dict[str, Client] = {}
        for client in clients or []:
            self.register(client)

    def register(self, client: Client) -> None:
        self._clients[client.client_id] = client

    def get(self, client_id: str) -> Client:
        """
        Raises:
            UnknownClientError: If no client has this ID
        """
        client = self._clients.get(client_id)
        if client is None:
            raise UnknownClientError(client_id)
        return client

    def all_clients(self) -> list[Client]:
        return list(self._clients.values())

    def detect_installed(self) -> list[Client]:
        return [client for client in self._clients.values() if client.is_installed()]
