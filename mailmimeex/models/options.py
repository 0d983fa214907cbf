"""RFC 3676 option set model."""

import re
from dataclasses import dataclass
from typing import Optional

FORMAT_PATTERN = re.compile(r"format=(\w+)", re.IGNORECASE)
DELSP_PATTERN = re.compile(r"delsp=(\w+)", re.IGNORECASE)


@dataclass
class FlowedOptions:
    """
    Message-level RFC 3676 options.

    Attributes:
        format: "flowed" when the body is format=flowed, else None
        delsp: "yes" when trailing spaces are deleted on unwrap, else None
    """

    format: Optional[str] = None
    delsp: Optional[str] = None

    @classmethod
    def from_content_type(cls, content_type: Optional[str]) -> "FlowedOptions":
        """
        Derive options from a Content-Type header value.

        A missing or malformed value yields empty options; this never raises.

        Examples:
            >>> FlowedOptions.from_content_type("text/plain; format=Flowed; DelSp=Yes")
            FlowedOptions(format='flowed', delsp='yes')
            >>> FlowedOptions.from_content_type("text/plain; charset=UTF-8")
            FlowedOptions(format=None, delsp=None)
        """
        options = cls()
        if not content_type:
            return options

        match = FORMAT_PATTERN.search(content_type)
        if match and match.group(1).lower() == "flowed":
            options.format = "flowed"
            match = DELSP_PATTERN.search(content_type)
            if match and match.group(1).lower() == "yes":
                options.delsp = "yes"

        return options

    def charset_suffix(self) -> str:
        """Return the `; format=...; delsp=...` suffix for a charset parameter."""
        if not self.format:
            return ""
        suffix = f"; format={self.format}"
        if self.delsp:
            suffix += f"; delsp={self.delsp}"
        return suffix
