"""Custom exceptions for ec2inst lookups."""

DESCRIBE_PERMISSION = "ec2:DescribeInstances"


class Ec2InstError(RuntimeError):
    """Base class for errors that abort a lookup."""


class MetadataUnavailableError(Ec2InstError):
    """Raised when the instance metadata service cannot be reached"""

    def __init__(self):
        super().__init__("Instance metadata not available. May not be running on AWS.")


class IdentityFetchError(Ec2InstError):
    """Raised when the instance identity document cannot be retrieved or parsed"""

    def __init__(self, original_error):
        super().__init__(f"Error getting instance identity document: {original_error}")


class DescribeFailedError(Ec2InstError):
    """Raised when DescribeInstances fails for the current instance"""

    def __init__(self, instance_id, original_error):
        self.instance_id = instance_id
        super().__init__(
            f"Error describing instance {instance_id}: {original_error}. "
            f"Make sure the instance role allows {DESCRIBE_PERMISSION}."
        )


class InstanceNotFoundError(Ec2InstError):
    """Raised when a describe response does not hold exactly one instance"""

    def __init__(self, instance_id, found=0, returned_id=None):
        self.instance_id = instance_id
        self.found = found
        self.returned_id = returned_id
        if returned_id is not None:
            message = f"Expected instance {instance_id}, describe returned {returned_id}"
        else:
            message = f"Expected exactly one instance for {instance_id}, describe returned {found}"
        super().__init__(message)


class UnknownFieldKeyError(ValueError):
    """Raised when a requested field key is not supported"""

    def __init__(self, key):
        self.key = key
        super().__init__(f"Unknown field key: {key!r}")
