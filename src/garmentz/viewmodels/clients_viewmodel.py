# Rev 0.2.0
from __future__ import annotations

from garmentz.models.entities import Client
from garmentz.viewmodels.entity_viewmodel import EntityViewModel


class ClientsViewModel(EntityViewModel):
    collection = "clients"
    entity_cls = Client
    noun = "client"
    required_field = "name"

    @property
    def clients(self) -> list[Client]:
        return self.cache

    def _label(self, entity: Client) -> str:
        return entity.name
