"""Constants shared by all operators."""

# Label key used by operators to specify the service.
APP_SELECTOR = "service"
# Label key used to add the owner CR as label.
OWNER_SELECTOR = "owner"
# Label key used for a sub component.
COMPONENT_SELECTOR = "component"
# File name used to add the service customizations.
CUSTOM_SERVICE_CONFIG_FILE_NAME = "custom.conf"
# File name used to add the policy rule customizations.
CUSTOM_POLICY_FILE_NAME = "custom.yaml"
# Name of the hash of hashes of all resources used to identify an input change.
INPUT_HASH_NAME = "input"
# Key under which a dump of the template parameters is stored in a secret.
TEMPLATE_PARAMETERS = "TemplateParameters"

_CLUSTER_DOMAIN = "cluster.local"


def get_dns_cluster_domain() -> str:
    """Return the cluster DNS domain name."""
    return _CLUSTER_DOMAIN