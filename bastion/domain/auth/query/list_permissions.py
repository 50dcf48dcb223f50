"""ListPermissions query and handler."""

from pydantic import BaseModel

from bastion.domain.shared.authorization.catalog import PermissionCatalog
from bastion.domain.shared.authorization.gate import public
from bastion.domain.shared.query import Query, QueryHandler, Result


class ListPermissions(Query):
    """Query for the permission catalog."""


class ResourcePermissionsDTO(BaseModel):
    resource: str
    permissions: dict[str, str]


class ListPermissionsResult(Result):
    resources: list[ResourcePermissionsDTO]


class ListPermissionsHandler(QueryHandler[ListPermissions, ListPermissionsResult]):
    """The catalog is static display data, so it needs no principal."""

    __auth__ = public()
    catalog: PermissionCatalog

    async def run(self, query: ListPermissions) -> ListPermissionsResult:
        descriptions = self.catalog.descriptions()
        return ListPermissionsResult(
            resources=[
                ResourcePermissionsDTO(
                    resource=resource.value,
                    permissions={
                        key: text
                        for key, text in descriptions.items()
                        if key.split(".", 1)[0] == resource.value
                    },
                )
                for resource in self.catalog.resources()
            ]
        )
