"""
Solar telemetry ingestion API.

Receives protobuf-encoded reading batches and system events from solar
charge-controller monitors and stores them in a relational database.
"""

__version__ = "2.0.0"
