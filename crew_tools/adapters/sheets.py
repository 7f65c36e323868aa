"""Google Sheets tools over the google-service-api proxy."""

import logging
from typing import Any, Dict, Mapping

from .proxy import GoogleProxyAdapter
from ..types import SheetDataResult, SheetListResult, ToolCategory, ToolParameters

logger = logging.getLogger(__name__)


class ListSheets(GoogleProxyAdapter):
    """List the sheet tabs of one spreadsheet."""

    name = "ListSheets"
    description = "List all sheets within a Google Spreadsheet"
    parameters = ToolParameters(
        properties={
            "spreadsheet_id": {"type": "string", "description": "The ID of the spreadsheet"},
        },
        required=["spreadsheet_id"],
    )
    category = ToolCategory.DATA
    failure_message = "Failed to list sheets"

    async def _call(self, credentials: Dict[str, str], args: Mapping[str, Any]) -> SheetListResult:
        data = await self._request(
            credentials,
            "GET",
            "sheets/sheets/",
            params={"spreadsheet_id": args["spreadsheet_id"]},
        )
        # The proxy answers either {"sheets": [...]} or a bare list.
        if isinstance(data, dict):
            return SheetListResult(sheets=data.get("sheets") or [])
        return SheetListResult(sheets=data)


class GetData(GoogleProxyAdapter):
    """
    Read a cell grid from one sheet.

    ``range`` is A1 notation relative to the sheet (e.g. ``"A1:B10"``). It is
    only sent when given; without it the proxy returns the whole sheet.
    """

    name = "GetData"
    description = "Get data from a specific sheet and range within a Google Spreadsheet"
    parameters = ToolParameters(
        properties={
            "spreadsheet_id": {"type": "string", "description": "The ID of the spreadsheet"},
            "sheetName": {
                "type": "string",
                "description": "The name of the sheet within the spreadsheet to get data from",
            },
            "range": {
                "type": "string",
                "description": 'The A1 notation range to get data from (e.g., "A1:B10"). If not provided, fetches all data.',
            },
        },
        required=["spreadsheet_id", "sheetName"],
    )
    category = ToolCategory.DATA
    failure_message = "Failed to get sheet data"

    async def _call(self, credentials: Dict[str, str], args: Mapping[str, Any]) -> SheetDataResult:
        params = {
            "spreadsheet_id": args["spreadsheet_id"],
            "sheetName": args["sheetName"],
        }
        if args.get("range"):
            params["range"] = args["range"]

        data = await self._request(credentials, "GET", "sheets/data/", params=params)

        if isinstance(data, dict):
            result = SheetDataResult(values=data.get("values") or [], range=data.get("range"))
        else:
            result = SheetDataResult(values=data)
        logger.debug(f"GetData returned {len(result.values)} rows from {args['sheetName']}")
        return result
