"""
Error conditions raised by QT-Miner.

The clustering core never reports failures any other way: every contract
violation or unusable input surfaces as one of the exceptions below, and the
session layer decides how to present it.
"""


class QTMinerError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgumentError(QTMinerError, ValueError):
    """A distance or construction call received an incompatible argument.

    Raised for mismatched tuple lengths, non-numeric values compared against
    a continuous attribute, inconsistent schemas and invalid radii.
    """


class EmptyDatasetError(QTMinerError):
    """The record set handed to the miner contains no records."""


class ClusteringRadiusError(QTMinerError):
    """The radius collapsed every record into a single cluster."""


class DataSourceError(QTMinerError):
    """Base class for record-source failures."""


class NoDataError(DataSourceError):
    """The requested table does not exist or holds no usable rows."""


class DatabaseConnectionError(DataSourceError):
    """The backing database could not be reached or queried."""


class NoValueError(DataSourceError):
    """An aggregate (MIN/MAX) has no value for a numeric column."""
