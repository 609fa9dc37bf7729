"""Registry clients for boxcloud."""

from boxcloud.client.protocol import RegistryClient
from boxcloud.client.vagrant_cloud import DEFAULT_TIMEOUT, VagrantCloudClient

__all__ = ["RegistryClient", "VagrantCloudClient", "DEFAULT_TIMEOUT"]
