from pydantic import BaseModel, ConfigDict, Field

class NodeAddress(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str
    port: int = Field(ge=1, le=65535)

    @classmethod
    def parse(cls, address: str, default_port: int) -> "NodeAddress":
        """Build an address from ``host``, ``host:port`` or ``[v6]:port``."""
        value = address.strip()
        if value.startswith("["):
            host, _, rest = value[1:].partition("]")
            port = rest.lstrip(":")
            return cls(host=host, port=int(port) if port else default_port)
        if value.count(":") == 1:
            host, port = value.split(":")
            return cls(host=host, port=int(port))
        return cls(host=value, port=default_port)

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"
