"""Custom exceptions for assetslicer.

This module defines a hierarchy of exceptions used throughout the assetslicer
library to provide clear, actionable error messages for different failure
scenarios.
"""


class AssetSlicerError(Exception):
    """Base exception for all assetslicer errors.

    All exceptions raised by assetslicer inherit from this class, making it
    easy to catch all slicing-related errors with a single except clause.

    Example:
        try:
            splits = split_module(module, {OptimizationDimension.LANGUAGE})
        except AssetSlicerError as e:
            print(f"assetslicer error: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class TargetingError(AssetSlicerError):
    """Base exception for targeting-related errors."""

    pass


class MalformedTargetingError(TargetingError):
    """A directory's targeting value is outside the domain of its dimension.

    Raised when, for example, a texture compression format token is not one
    of the known formats. It indicates corrupt upstream data and aborts the
    whole split operation for the module.

    Attributes:
        dimension: The dimension name the value was declared for.
        value: The offending value.
        directory: The directory path that declared it, when known.
    """

    def __init__(self, dimension: str, value: object, directory: str | None = None):
        self.dimension = dimension
        self.value = value
        self.directory = directory
        message = f"Malformed {dimension} targeting value {value!r}"
        if directory:
            message += f" in directory '{directory}'"
        super().__init__(message)


class ConflictingTargetingError(TargetingError):
    """Two targetings assign different concrete values to one dimension.

    Attributes:
        dimension: The dimension both sides assign.
        left: The value on the left-hand side of the combine.
        right: The value on the right-hand side of the combine.
    """

    def __init__(self, dimension: str, left: object, right: object):
        self.dimension = dimension
        self.left = left
        self.right = right
        message = (
            f'Cannot combine conflicting {dimension} targeting: '
            f'{left!r} vs {right!r}'
        )
        super().__init__(message)


class SplitInvariantError(AssetSlicerError):
    """The produced split list violates a partition invariant.

    Attributes:
        module_name: The module being split, when known.
    """

    def __init__(self, message: str, module_name: str | None = None):
        self.module_name = module_name
        full_message = message
        if module_name:
            full_message = f"{message} (module '{module_name}')"
        super().__init__(full_message)


class ModuleError(AssetSlicerError):
    """Base exception for module description errors."""

    pass


class ModuleLoadError(ModuleError):
    """Failed to load a module description from a source.

    Attributes:
        source: The source path or URL that failed to load.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        message = f"Failed to load module from '{source}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class ModuleValidationError(ModuleError):
    """A module description is structurally invalid.

    Attributes:
        source: The source path or URL of the invalid description.
        errors: List of validation error messages.
    """

    def __init__(self, source: str, errors: list[str] | None = None):
        self.source = source
        self.errors = errors or []
        message = f"Module validation failed for '{source}'"
        if errors:
            message += f': {"; ".join(errors)}'
        super().__init__(message)


class ConfigurationError(AssetSlicerError):
    """Error in configuration.

    Attributes:
        config_path: The path to the configuration file, if applicable.
        field: The specific configuration field that is invalid.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)


class OutputError(AssetSlicerError):
    """Error writing a split plan.

    Attributes:
        output_path: The path where output was being written.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, output_path: str, cause: Exception | None = None):
        self.output_path = output_path
        self.cause = cause
        message = f"Failed to write output to '{output_path}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)
