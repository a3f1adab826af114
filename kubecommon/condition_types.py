"""Condition model and the common condition types, reasons and messages."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

__all__ = [
    "Severity",
    "ConditionStatus",
    "Condition",
]


class Severity(str, Enum):
    """How severe a failing condition is."""

    # A condition with Status=False is an error.
    ERROR = "Error"
    # A condition with Status=False is a warning.
    WARNING = "Warning"
    # A condition with Status=False is informative.
    INFO = "Info"
    # Applies only to conditions with Status=True or Status=Unknown.
    NONE = ""

    def __str__(self) -> str:
        return self.value


class ConditionStatus(str, Enum):
    """The status of a condition."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value


@dataclass
class Condition:
    """An observation of the operational state of an API resource.

    ``status`` is normally a :class:`ConditionStatus`, but any string is kept
    as given so that invalid states can be detected. ``last_transition_time``
    is ``None`` until the condition is set on a list.
    """

    type: str
    status: ConditionStatus | str
    severity: Severity | str = Severity.NONE
    last_transition_time: datetime | None = None
    reason: str = ""
    message: str = ""


# Common condition types.
READY_CONDITION = "Ready"
INPUT_READY_CONDITION = "InputReady"
SERVICE_CONFIG_READY_CONDITION = "ServiceConfigReady"
DB_READY_CONDITION = "DBReady"
DB_SYNC_READY_CONDITION = "DBSyncReady"
CREATE_SERVICE_READY_CONDITION = "CreateServiceReady"
EXPOSE_SERVICE_READY_CONDITION = "ExposeServiceReady"
BOOTSTRAP_READY_CONDITION = "BootstrapReady"
DEPLOYMENT_READY_CONDITION = "DeploymentReady"
KEYSTONE_SERVICE_READY_CONDITION = "KeystoneServiceReady"
KEYSTONE_ENDPOINT_READY_CONDITION = "KeystoneEndpointReady"
NETWORK_ATTACHMENTS_READY_CONDITION = "NetworkAttachmentsReady"
CRON_JOB_READY_CONDITION = "CronJobReady"
JOB_READY_CONDITION = "JobReady"
MEMCACHED_READY_CONDITION = "MemcachedReady"
RABBITMQ_TRANSPORT_URL_READY_CONDITION = "RabbitMqTransportURLReady"
NOTIFICATION_BUS_INSTANCE_READY_CONDITION = "NotificationBusInstanceReady"
ANSIBLE_EE_CONDITION = "AnsibleEEReady"
SERVICE_ACCOUNT_READY_CONDITION = "ServiceAccountReady"
ROLE_READY_CONDITION = "RoleReady"
ROLE_BINDING_READY_CONDITION = "RoleBindingReady"
TLS_INPUT_READY_CONDITION = "TLSInputReady"
TOPOLOGY_READY_CONDITION = "TopologyReady"

# Common reasons.
REQUESTED_REASON = "Requested"
NOT_REQUESTED_REASON = "NotRequested"
CREATION_FAILED_REASON = "CreationFailed"
READY_REASON = "Ready"
INIT_REASON = "Init"
ERROR_REASON = "Error"
JOB_REASON_BACKOFF_LIMIT_EXCEEDED = "BackoffLimitExceeded"
DELETING_REASON = "Deleting"
DELETION_FAILED_REASON = "DeletionFailed"
DELETED_REASON = "Deleted"

# Overall Ready condition messages.
READY_INIT_MESSAGE = "Setup started"
READY_MESSAGE = "Setup complete"

# InputReady condition messages.
INPUT_READY_INIT_MESSAGE = "Input data not checked"
INPUT_READY_MESSAGE = "Input data complete"
INPUT_READY_WAITING_MESSAGE = "Input data resources missing"
INPUT_READY_ERROR_MESSAGE = "Input data error occurred %s"

# ServiceConfig condition messages.
SERVICE_CONFIG_READY_INIT_MESSAGE = "Service config create not started"
SERVICE_CONFIG_READY_MESSAGE = "Service config create completed"
SERVICE_CONFIG_READY_ERROR_MESSAGE = "Service config create error occurred %s"

# DBReady condition messages.
DB_READY_INIT_MESSAGE = "DB create not started"
DB_READY_MESSAGE = "DB create completed"
DB_READY_RUNNING_MESSAGE = "DB create job still running"
DB_READY_ERROR_MESSAGE = "DB create job error occurred %s"

# DBSync condition messages.
DB_SYNC_READY_INIT_MESSAGE = "DBsync not started"
DB_SYNC_READY_MESSAGE = "DBsync completed"
DB_SYNC_READY_RUNNING_MESSAGE = "DBsync job still running"
DB_SYNC_READY_ERROR_MESSAGE = "DBsync job error occurred %s"

# CreateService condition messages.
CREATE_SERVICE_READY_INIT_MESSAGE = "Create service not started"
CREATE_SERVICE_READY_MESSAGE = "Create service completed"
CREATE_SERVICE_READY_RUNNING_MESSAGE = "Create service in progress"
CREATE_SERVICE_READY_ERROR_MESSAGE = "Create service error occurred %s"

# ExposeService condition messages.
EXPOSE_SERVICE_READY_INIT_MESSAGE = "Exposing service not started"
EXPOSE_SERVICE_READY_MESSAGE = "Exposing service completed"
EXPOSE_SERVICE_READY_RUNNING_MESSAGE = "Exposing service in progress"
EXPOSE_SERVICE_READY_ERROR_MESSAGE = "Exposing service error occurred %s"

# BootstrapReady condition messages.
BOOTSTRAP_READY_INIT_MESSAGE = "Bootstrap not started"
BOOTSTRAP_READY_MESSAGE = "Bootstrap completed"
BOOTSTRAP_READY_RUNNING_MESSAGE = "Bootstrap in progress"
BOOTSTRAP_READY_ERROR_MESSAGE = "Bootstrap error occurred %s"

# DeploymentReady condition messages.
DEPLOYMENT_READY_INIT_MESSAGE = "Deployment not started"
DEPLOYMENT_READY_MESSAGE = "Deployment completed"
DEPLOYMENT_READY_RUNNING_MESSAGE = "Deployment in progress"
DEPLOYMENT_READY_ERROR_MESSAGE = "Deployment error occurred %s"

# NetworkAttachmentsReady condition messages.
NETWORK_ATTACHMENTS_READY_INIT_MESSAGE = "NetworkAttachments not started"
NETWORK_ATTACHMENTS_READY_MESSAGE = "NetworkAttachments completed"
NETWORK_ATTACHMENTS_READY_WAITING_MESSAGE = "NetworkAttachment resources missing: %s"
NETWORK_ATTACHMENTS_READY_ERROR_MESSAGE = "NetworkAttachments error occurred %s"
NETWORK_ATTACHMENTS_ERROR_MESSAGE = (
    "NetworkAttachments error occurred not all pods have interfaces with ips "
    "as configured in NetworkAttachments: %s"
)

# CronJobReady condition messages.
CRON_JOB_READY_INIT_MESSAGE = "CronJob not started"
CRON_JOB_READY_MESSAGE = "CronJob completed"
CRON_JOB_READY_ERROR_MESSAGE = "CronJob error occurred %s"

# JobReady condition messages.
JOB_READY_INIT_MESSAGE = "Job not started"
JOB_READY_MESSAGE = "Job completed"
JOB_READY_RUNNING_MESSAGE = "Job in progress"
JOB_READY_ERROR_MESSAGE = "Job error occurred %s"

# MemcachedReady condition messages.
MEMCACHED_READY_INIT_MESSAGE = " Memcached create not started"
MEMCACHED_READY_MESSAGE = " Memcached instance has been provisioned"
MEMCACHED_READY_WAITING_MESSAGE = " Memcached instance has not been provisioned"
MEMCACHED_READY_ERROR_MESSAGE = " Memcached error occurred %s"

# RabbitMqTransportURLReady condition messages.
RABBITMQ_TRANSPORT_URL_READY_INIT_MESSAGE = "RabbitMqTransportURL not started"
RABBITMQ_TRANSPORT_URL_READY_RUNNING_MESSAGE = "RabbitMqTransportURL creation in progress"
RABBITMQ_TRANSPORT_URL_READY_MESSAGE = "RabbitMqTransportURL successfully created"
RABBITMQ_TRANSPORT_URL_READY_ERROR_MESSAGE = "RabbitMqTransportURL error occured %s"

# NotificationBusInstanceReady condition messages.
NOTIFICATION_BUS_INSTANCE_READY_INIT_MESSAGE = "NotificationBusInstance not started"
NOTIFICATION_BUS_INSTANCE_READY_RUNNING_MESSAGE = (
    "NotificationBusInstance creation in progress"
)
NOTIFICATION_BUS_INSTANCE_READY_MESSAGE = "NotificationBusInstance successfully created"
NOTIFICATION_BUS_INSTANCE_READY_ERROR_MESSAGE = "NotificationBusInstance error occured %s"

# AnsibleEEReady condition messages.
ANSIBLE_EE_READY_INIT_MESSAGE = "AnsibleEE not started"
ANSIBLE_EE_READY_MESSAGE = "AnsibleEE completed"
ANSIBLE_EE_READY_RUNNING_MESSAGE = "AnsibleEE in progress"
ANSIBLE_EE_READY_ERROR_MESSAGE = "AnsibleEE error occurred %s"

# TLSInputReady condition messages.
TLS_INPUT_READY_WAITING_MESSAGE = "TLSInput is missing: %s"
TLS_INPUT_ERROR_MESSAGE = "TLSInput error occured in TLS sources %s"

# Topology condition messages.
TOPOLOGY_READY_INIT_MESSAGE = "Topology config create not started"
TOPOLOGY_READY_MESSAGE = "Topology config create completed"
TOPOLOGY_READY_ERROR_MESSAGE = "Topology config create error occurred %s"

# Service account, role and role binding messages.
SERVICE_ACCOUNT_READY_ERROR_MESSAGE = "ServiceAccount error occurred %s"
SERVICE_ACCOUNT_CREATING_MESSAGE = "ServiceAccount creation in progress"
SERVICE_ACCOUNT_READY_INIT_MESSAGE = "ServiceAccount not created"
SERVICE_ACCOUNT_READY_MESSAGE = "ServiceAccount created"
ROLE_READY_ERROR_MESSAGE = "Role error occurred %s"
ROLE_CREATING_MESSAGE = "Role creation in progress"
ROLE_READY_INIT_MESSAGE = "Role not created"
ROLE_READY_MESSAGE = "Role created"
ROLE_BINDING_READY_ERROR_MESSAGE = "RoleBinding error occurred %s"
ROLE_BINDING_CREATING_MESSAGE = "RoleBinding creation in progress"
ROLE_BINDING_READY_INIT_MESSAGE = "RoleBinding not created"
ROLE_BINDING_READY_MESSAGE = "RoleBinding created"