"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
Settings use the OUTLINEGREP_ prefix (e.g., OUTLINEGREP_OPTIONS="--ellipsis -C 2").
The pager and the shell used to start it come from the usual PAGER and SHELL
variables.

Settings can also be loaded from a .env file in the working directory.
"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use OUTLINEGREP_ prefix, except PAGER and SHELL.

    Examples:
        OUTLINEGREP_OPTIONS="--no-pager --ellipsis"
        OUTLINEGREP_ELLIPSIS_MARKER=...
        PAGER="less -R"
    """

    model_config = SettingsConfigDict(
        env_prefix="OUTLINEGREP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Command line defaults
    options: str = Field(
        default="",
        description="Default command line options, prepended to the real arguments",
    )

    # Output configuration
    ellipsis_marker: str = Field(
        default="…",
        description="Marker printed in place of elided lines",
    )

    line_number_width: int = Field(
        default=4,
        ge=1,
        description="Minimum width of the right-aligned line number column",
    )

    # Pager configuration
    pager: Optional[str] = Field(
        default=None,
        validation_alias="PAGER",
        description="Pager command line, run through the shell; less is used when unset",
    )

    shell: str = Field(
        default="/bin/sh",
        validation_alias="SHELL",
        description="Shell used to start a custom pager command line",
    )

    def options_split(self) -> List[str]:
        """
        Split the default options string into arguments.

        Returns:
            List of default arguments (empty when unset)

        Raises:
            OptionsEncodingError: If the variable held bytes that are not
                                  valid UTF-8

        Example:
            >>> AppSettings(options="--ellipsis  -C 2").options_split()
            ['--ellipsis', '-C', '2']
        """
        from ..lib.errors import OptionsEncodingError

        try:
            self.options.encode("utf-8")
        except UnicodeEncodeError as e:
            # os.environ keeps undecodable bytes as lone surrogates
            raise OptionsEncodingError() from e
        return self.options.split()


# Singleton instance - import this in your code
appsettings = AppSettings()
