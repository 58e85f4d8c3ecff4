# /lanscout/adapters/system/interfaces.py
from __future__ import annotations

import logging
import socket

import psutil

LOG = logging.getLogger("adapter.interfaces")


class PsutilInterfaceLister:
    def ipv4_addresses(self) -> list[str]:
        addrs = psutil.net_if_addrs()
        stats = psutil.net_if_stats()

        out: list[str] = []
        for ifname, lst in addrs.items():
            st = stats.get(ifname)
            if not st or not st.isup:
                continue
            for a in lst:
                if a.family != socket.AF_INET or not a.address:
                    continue
                if a.address.startswith("127."):
                    continue
                out.append(a.address)

        LOG.debug("interfaces.listed", extra={"extra": {"addresses": out}})
        return out
