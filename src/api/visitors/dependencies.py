"""Dependency injection for the visitors bounded context."""

from typing import Annotated

from fastapi import Depends

from infrastructure.commerce import CommerceApiClient
from infrastructure.dependencies import get_commerce_client
from infrastructure.settings import StorefrontSettings, get_settings
from visitors.application.observability import DefaultVisitorProbe, VisitorProbe
from visitors.application.tracking import VisitorTrackingService
from visitors.infrastructure.tracking_gateway import CommerceVisitorTrackingGateway
from visitors.ports.gateways import IVisitorTrackingGateway


def get_visitor_probe() -> VisitorProbe:
    """Get VisitorProbe instance."""
    return DefaultVisitorProbe()


def get_visitor_tracking_gateway(
    client: Annotated[CommerceApiClient, Depends(get_commerce_client)],
) -> IVisitorTrackingGateway:
    """Get the tracking gateway backed by the shared commerce client."""
    return CommerceVisitorTrackingGateway(client=client)


def get_visitor_tracking_service(
    gateway: Annotated[IVisitorTrackingGateway, Depends(get_visitor_tracking_gateway)],
    settings: Annotated[StorefrontSettings, Depends(get_settings)],
    probe: Annotated[VisitorProbe, Depends(get_visitor_probe)],
) -> VisitorTrackingService:
    """Get VisitorTrackingService instance."""
    return VisitorTrackingService(gateway=gateway, settings=settings, probe=probe)
