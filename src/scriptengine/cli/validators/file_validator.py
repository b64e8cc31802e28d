"""File and path validators for CLI input."""

from __future__ import annotations

from pathlib import Path

from scriptengine.cli.validators.base import ValidationError, Validator
from scriptengine.importer import EXTENSION_FORMATS


class FileValidator(Validator[Path]):
    """Validator for file paths."""

    def __init__(
        self,
        must_exist: bool = True,
        must_be_file: bool = True,
        extensions: list[str] | None = None,
    ) -> None:
        """Initialize file validator.

        Args:
            must_exist: Whether file must exist
            must_be_file: Whether path must be a file (not directory)
            extensions: Allowed file extensions (e.g., [".fountain", ".fdx"])
        """
        self.must_exist = must_exist
        self.must_be_file = must_be_file
        self.extensions = extensions

    def validate(self, value: str | Path) -> Path:
        """Validate file path.

        Args:
            value: File path to validate

        Returns:
            Validated, resolved Path object

        Raises:
            ValidationError: If validation fails
        """
        self.validate_required(value, "path")
        path = Path(value).expanduser().resolve()

        if self.must_exist and not path.exists():
            raise ValidationError(
                f"File does not exist: {path}",
                hint="Check that the file path is correct",
                details={"file": str(path)},
            )

        if self.must_be_file and path.exists() and not path.is_file():
            raise ValidationError(
                f"Path is not a file: {path}", details={"file": str(path)}
            )

        if self.extensions and path.suffix.lower() not in self.extensions:
            raise ValidationError(
                f"Invalid file extension: {path.suffix or '(none)'}",
                hint=f"Expected one of: {', '.join(self.extensions)}",
                details={"file": str(path)},
            )

        return path


class ScriptFileValidator(FileValidator):
    """Validator for screenplay input files.

    Extensions are only enforced when unknown inputs may not fall back to
    Fountain.
    """

    def __init__(self, default_to_fountain: bool = True) -> None:
        super().__init__(
            must_exist=True,
            must_be_file=True,
            extensions=None if default_to_fountain else sorted(EXTENSION_FORMATS),
        )


class ConfigFileValidator(FileValidator):
    """Validator specifically for configuration files."""

    def __init__(self) -> None:
        """Initialize config file validator."""
        super().__init__(
            must_exist=True,
            must_be_file=True,
            extensions=[".yaml", ".yml", ".json", ".toml"],
        )
