"""Provider wiring: builds the Monte Carlo client and configures resources."""

import logging
from typing import Dict, Optional

from mcprovider.client.graphql import MonteCarloClient
from mcprovider.core.config import Settings, settings as default_settings
from mcprovider.core.diagnostics import Diagnostics
from mcprovider.resources.transactional_warehouse import TransactionalWarehouseResource

logger = logging.getLogger(__name__)


class MonteCarloProvider:
    """Owns the API client shared by every resource of the provider."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self.client: Optional[MonteCarloClient] = None
        self._resources: Dict[str, TransactionalWarehouseResource] = {}

    @property
    def type_name(self) -> str:
        return self.settings.provider_type_name

    def configure(self, client: Optional[MonteCarloClient] = None) -> Diagnostics:
        """Create the client (unless one is given) and hand it to every resource."""
        self.client = client or MonteCarloClient(
            api_url=self.settings.mc_api_url,
            api_key_id=self.settings.mc_api_key_id,
            api_key_token=self.settings.mc_api_key_token,
            timeout=self.settings.mc_api_timeout,
        )
        diags = Diagnostics()
        for resource in self.resources().values():
            diags.append_all(resource.configure(self.client))
        logger.info(
            f"Provider '{self.type_name}' configured against {self.settings.mc_api_url}",
            extra={"event": "provider_configured"},
        )
        return diags

    def resources(self) -> Dict[str, TransactionalWarehouseResource]:
        """Resources keyed by their full type name."""
        if not self._resources:
            resource = TransactionalWarehouseResource()
            type_name = resource.metadata(self.type_name).type_name
            self._resources[type_name] = resource
        return self._resources

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            self.client = None
