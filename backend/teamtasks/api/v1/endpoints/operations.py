from typing import Any, Dict

from fastapi import APIRouter, Depends

from teamtasks.api import deps
from teamtasks.api.resolver import OperationResolver
from teamtasks.schemas.operations import OperationCall, OperationRequest

router = APIRouter()


@router.post("")
async def run_operation(
    call: OperationCall,
    claims: Dict[str, Any] = Depends(deps.get_identity_claims),
    resolver: OperationResolver = Depends(deps.get_resolver),
):
    """
    Run one named operation as the authenticated caller.

    Errors are returned as {"errorType": ..., "message": ...} with a status
    code per kind (see main.task_service_error_handler).
    """
    request = OperationRequest(
        operation=call.operation,
        arguments=call.arguments,
        identity=claims,
    )
    return {"data": await resolver.resolve(request)}
