class PrismReportError(Exception):
    """Base exception for prismreport."""

    pass


class TransportError(PrismReportError):
    """Raised when a request times out, cannot connect, or returns an HTTP error."""

    pass


class StorageQueryError(TransportError):
    """Raised when the per-cluster storage pool endpoint cannot be queried."""

    pass


class MalformedSeriesError(PrismReportError):
    """Raised when a grouped-metrics response cannot be decoded into name/value pairs."""

    pass


class ValueFormatError(PrismReportError):
    """Raised when a value expected to be numeric is not."""

    pass


class DirectoryLookupError(PrismReportError):
    """Raised when a cluster name has no entry in the cluster directory."""

    pass


class StorageCapacityError(PrismReportError, ArithmeticError):
    """Raised when the usable storage capacity of a cluster is zero or not finite."""

    pass


class ExportError(PrismReportError):
    """Raised when the report cannot be written."""

    pass
