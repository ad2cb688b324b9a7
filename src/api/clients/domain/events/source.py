"""Source tag carried by every event this service publishes."""

EVENT_SOURCE = "ClientManagementService"
