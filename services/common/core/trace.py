import secrets
import time
from typing import Optional


class TraceId:
    """
    AWS X-Ray trace header carried by X-Amzn-Trace-Id:
    Root=1-timestamp-uniqueid;Parent=parentid;Sampled=flag
    """

    def __init__(self, root: str, parent: Optional[str] = None, sampled: str = "1"):
        self.root = root
        self.parent = parent
        self.sampled = sampled

    @classmethod
    def generate(cls) -> "TraceId":
        """New root id: 8 hex digit epoch seconds plus 24 random hex digits."""
        epoch_hex = f"{int(time.time()):08x}"
        return cls(root=f"1-{epoch_hex}-{secrets.token_hex(12)}")

    @classmethod
    def parse(cls, header: str) -> "TraceId":
        """
        Parse an X-Amzn-Trace-Id header.

        A bare id without key=value parts is taken as the root.

        Raises:
            ValueError: no root id can be found
        """
        parts = {}
        for part in header.split(";"):
            if "=" in part:
                key, value = part.split("=", 1)
                parts[key.strip()] = value.strip()

        root = parts.get("Root", "")
        if not root and "=" not in header:
            root = header.strip()
        if not root:
            raise ValueError(f"No trace root in header: {header!r}")

        return cls(root=root, parent=parts.get("Parent"), sampled=parts.get("Sampled", "1"))

    def __str__(self) -> str:
        value = f"Root={self.root}"
        if self.parent:
            value += f";Parent={self.parent}"
        if self.sampled:
            value += f";Sampled={self.sampled}"
        return value
