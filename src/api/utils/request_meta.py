from typing import Optional

from fastapi import Request


def client_ip(request: Request) -> Optional[str]:
    """First hop of X-Forwarded-For / X-Real-IP when behind the CF router, else the peer address"""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return request.client.host if request.client else None


def user_agent(request: Request) -> Optional[str]:
    return request.headers.get("user-agent")
