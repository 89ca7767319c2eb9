"""Alert API endpoints.

Implements the alert lifecycle operations:
- POST /api/alerts - Create an alert
- PUT /api/alerts/{alert_id} - Replace the editable fields of an alert
- POST /api/alerts/delete - Delete a batch of alerts
- GET /api/alerts - List alerts (optionally by ids)

Every mutation is written to the state file before the response is sent.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query, status

from app.crypto_alerts.application.dto.alert_dto import (
    AlertDefinitionRequest,
    AlertDTO,
    AlertListDTO,
    CreateAlertResponse,
)
from app.crypto_alerts.application.exceptions import AlertNotFoundError
from app.crypto_alerts.application.use_cases.manage_alerts import (
    CreateAlertUseCase,
    DeleteAlertsUseCase,
    ListAlertsUseCase,
    UpdateAlertUseCase,
)
from app.crypto_alerts.container import ServiceContainer
from app.crypto_alerts.presentation.api.dependencies import get_container

router = APIRouter()


def _not_found(e: AlertNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=e.message,
    )


@router.post("/alerts", response_model=CreateAlertResponse, status_code=status.HTTP_201_CREATED)
async def create_alert(
    request: AlertDefinitionRequest,
    container: ServiceContainer = Depends(get_container),
) -> CreateAlertResponse:
    """Create a new price alert.

    The symbol is not checked against the catalog; an alert on an unknown
    symbol simply never receives a quote.

    Args:
        request: Condition and delivery fields.
        container: Application services (injected).

    Returns:
        The id of the new alert, needed to update or delete it later.
    """
    use_case = CreateAlertUseCase(alert_repository=container.alert_repository)
    alert_id = await use_case.execute(request)
    await container.persist()
    return CreateAlertResponse(id=alert_id)


@router.put("/alerts/{alert_id}", response_model=AlertDTO)
async def update_alert(
    alert_id: Annotated[str, Path(description="Alert ID")],
    request: AlertDefinitionRequest,
    container: ServiceContainer = Depends(get_container),
) -> AlertDTO:
    """Replace the editable fields of an alert.

    The activation timestamp, if any, is kept.

    Raises:
        HTTPException: 404 if alert not found.
    """
    use_case = UpdateAlertUseCase(alert_repository=container.alert_repository)

    try:
        result = await use_case.execute(alert_id, request)
    except AlertNotFoundError as e:
        raise _not_found(e) from e

    await container.persist()
    return result


@router.post("/alerts/delete", status_code=status.HTTP_204_NO_CONTENT)
async def delete_alerts(
    alert_ids: Annotated[list[str], Body(description="IDs of the alerts to delete")],
    container: ServiceContainer = Depends(get_container),
) -> None:
    """Delete several alerts at once.

    Nothing is deleted when any of the ids is unknown.

    Raises:
        HTTPException: 404 listing the unknown ids.
    """
    use_case = DeleteAlertsUseCase(alert_repository=container.alert_repository)

    try:
        await use_case.execute(alert_ids)
    except AlertNotFoundError as e:
        raise _not_found(e) from e

    await container.persist()


@router.get("/alerts", response_model=AlertListDTO)
async def list_alerts(
    ids: Annotated[
        Optional[list[str]],
        Query(description="Alert IDs to return; every alert when omitted"),
    ] = None,
    container: ServiceContainer = Depends(get_container),
) -> AlertListDTO:
    """List alerts with their evaluation state.

    Raises:
        HTTPException: 404 if any requested id is unknown.
    """
    use_case = ListAlertsUseCase(alert_repository=container.alert_repository)

    try:
        alerts = await use_case.execute(ids)
    except AlertNotFoundError as e:
        raise _not_found(e) from e

    return AlertListDTO(alerts=alerts, total=len(alerts))
