"""Gateway — owns the directory, security policy and tool registry."""

import logging
from typing import Optional

from .directory import Directory
from .errors import ToolResult
from .resources import Resource, read_resource, resource_catalog
from .security import PostingPolicy, SecurityPolicy
from .tools import build_registry

logger = logging.getLogger("slackgate.gateway")


class Gateway:
    """Everything a tool call needs, constructed explicitly.

    The directory is built before the gateway exists and is never written
    to again, so handlers share it without locking.
    """

    def __init__(
        self,
        client,
        directory: Directory,
        posting: Optional[PostingPolicy] = None,
        strict_channel_ids: bool = False,
        resource_scheme: str = "slack",
    ):
        self.client = client
        self.directory = directory
        self.policy = SecurityPolicy(directory, posting=posting, strict_channel_ids=strict_channel_ids)
        self.resource_scheme = resource_scheme
        self.registry = build_registry(self)

    @classmethod
    async def start(cls, client, settings) -> "Gateway":
        """Build the directory, then the gateway.

        Raises:
            StartupFailure: directory could not be built completely
        """
        directory = await Directory.build(client, max_pages=settings.max_directory_pages)
        gateway = cls(
            client,
            directory,
            posting=settings.posting_policy(),
            strict_channel_ids=settings.strict_channel_ids,
            resource_scheme=settings.resource_scheme,
        )
        if settings.strict_channel_ids:
            logger.info("Strict channel IDs: raw IDs outside the directory are rejected")
        return gateway

    @property
    def workspace(self) -> str:
        return self.directory.workspace

    async def call_tool(self, name: str, arguments: Optional[dict] = None) -> ToolResult:
        return await self.registry.execute(name, arguments)

    def list_resources(self) -> list[Resource]:
        return resource_catalog(self.resource_scheme, self.workspace)

    def read_resource(self, uri: str) -> str:
        return read_resource(self.policy, self.resource_scheme, uri)
