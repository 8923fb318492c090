from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProxyType(str, Enum):
    manual = "manual"
    pac = "pac"
    direct = "direct"
    system = "system"
    autodetect = "autodetect"


class ProxyConfig(BaseModel):
    """
    Value Object: configuración de proxy para la capability `proxy`.

    - manual: requiere al menos uno de http/ssl/ftp/socks
    - pac: requiere proxy_autoconfig_url
    - direct/system/autodetect: sin campos extra
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    proxy_type: ProxyType
    http_proxy: Optional[str] = None
    ssl_proxy: Optional[str] = None
    ftp_proxy: Optional[str] = None
    socks_proxy: Optional[str] = None
    socks_version: Optional[int] = Field(default=None, ge=4, le=5)
    no_proxy: Optional[str] = None
    proxy_autoconfig_url: Optional[str] = None

    @model_validator(mode="after")
    def _check_consistency(self) -> "ProxyConfig":
        if self.proxy_type == ProxyType.manual:
            if not (self.http_proxy or self.ssl_proxy or self.ftp_proxy or self.socks_proxy):
                raise ValueError("proxy manual sin hosts (http/ssl/ftp/socks)")
        elif self.proxy_type == ProxyType.pac:
            if not self.proxy_autoconfig_url:
                raise ValueError("proxy pac requiere proxy_autoconfig_url")
        if self.socks_proxy and self.socks_version is None:
            raise ValueError("socks_proxy requiere socks_version")
        return self

    # ---------- constructores ----------
    @classmethod
    def manual(
        cls,
        *,
        http: Optional[str] = None,
        https: Optional[str] = None,
        ftp: Optional[str] = None,
        bypass: Optional[str] = None,
    ) -> "ProxyConfig":
        return cls(
            proxy_type=ProxyType.manual,
            http_proxy=http,
            ssl_proxy=https,
            ftp_proxy=ftp,
            no_proxy=bypass,
        )

    @classmethod
    def pac(cls, url: str) -> "ProxyConfig":
        return cls(proxy_type=ProxyType.pac, proxy_autoconfig_url=url)

    @classmethod
    def direct(cls) -> "ProxyConfig":
        return cls(proxy_type=ProxyType.direct)

    @classmethod
    def system(cls) -> "ProxyConfig":
        return cls(proxy_type=ProxyType.system)

    @classmethod
    def from_url(cls, proxy_str: str, *, bypass: Optional[str] = None) -> "ProxyConfig":
        """
        Parsea 'host:port' o 'scheme://host:port' a un proxy manual.
        socks4/socks5 van a socks_proxy; el resto se usa para http y https.
        """
        raw = (proxy_str or "").strip()
        if not raw:
            raise ValueError("proxy vacío")
        if "://" not in raw:
            raw = "http://" + raw
        parsed = urlparse(raw)
        if not parsed.hostname or not parsed.port:
            raise ValueError("Proxy inválido, esperado 'host:port' o 'scheme://host:port'")
        if parsed.username or parsed.password:
            raise ValueError("La capability proxy no admite credenciales en la URL")

        address = f"{parsed.hostname}:{parsed.port}"
        scheme = parsed.scheme.lower()
        if scheme in ("socks4", "socks5"):
            return cls(
                proxy_type=ProxyType.manual,
                socks_proxy=address,
                socks_version=int(scheme[-1]),
                no_proxy=bypass,
            )
        return cls.manual(http=address, https=address, bypass=bypass)

    # ---------- serialización ----------
    def to_capability(self) -> Dict[str, Any]:
        """Dict listo para la capability `proxy` (claves camelCase del protocolo)."""
        wire: Dict[str, Any] = {"proxyType": self.proxy_type.value}
        fields = (
            ("httpProxy", self.http_proxy),
            ("sslProxy", self.ssl_proxy),
            ("ftpProxy", self.ftp_proxy),
            ("socksProxy", self.socks_proxy),
            ("socksVersion", self.socks_version),
            ("proxyAutoconfigUrl", self.proxy_autoconfig_url),
        )
        for name, value in fields:
            if value is not None:
                wire[name] = value
        if self.no_proxy:
            wire["noProxy"] = [h.strip() for h in self.no_proxy.split(",") if h.strip()]
        return wire
