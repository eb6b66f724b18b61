import logging
from typing import List, Optional

import httpx

from wellness.domain.Plan import DailyPlan
from wellness.domain.errors import StoreError
from wellness.infra.Plan_Repository import PlanStore

logger = logging.getLogger(__name__)

TABLE = "daily_plans"


def plan_to_record(plan: DailyPlan) -> dict:
    data = plan.to_dict()
    return {
        "date": plan.date,
        "quote_text": plan.quote.text,
        "quote_author": plan.quote.author,
        "workout": data["workout"],
        "meals": data["meals"],
    }


def record_to_plan(record: dict) -> DailyPlan:
    if not isinstance(record, dict):
        raise StoreError(f"Unexpected {TABLE} record: {record!r}")
    return DailyPlan.from_dict({
        "date": record.get("date", ""),
        "quote": {"text": record.get("quote_text", ""), "author": record.get("quote_author", "")},
        "workout": record.get("workout") or [],
        "meals": record.get("meals") or {},
    })


class SupabasePlanRepository(PlanStore):
    """Plan store backed by a managed Supabase (PostgREST) table with JSON columns."""

    def __init__(self, url: str, api_key: str, client: Optional[httpx.Client] = None, timeout: float = 10.0):
        self.base_url = url.rstrip("/") + "/rest/v1"
        headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        if client is None:
            client = httpx.Client(base_url=self.base_url, headers=headers, timeout=timeout)
        else:
            client.base_url = self.base_url
            client.headers.update(headers)
        self._client = client

    def _request(self, method: str, *, params=None, json=None, headers=None) -> httpx.Response:
        try:
            response = self._client.request(method, f"/{TABLE}", params=params, json=json, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise StoreError(f"Supabase {method} {TABLE} failed: {e}") from e
        return response

    def _records(self, response: httpx.Response) -> list:
        try:
            records = response.json()
        except ValueError as e:
            raise StoreError(f"Supabase returned a non-JSON body for {TABLE}: {e}") from e
        if not isinstance(records, list):
            raise StoreError(f"Supabase returned unexpected content for {TABLE}")
        return records

    def get(self, plan_date: str) -> Optional[DailyPlan]:
        response = self._request("GET", params={"select": "*", "date": f"eq.{plan_date}", "limit": "1"})
        records = self._records(response)
        if not records:
            return None
        return record_to_plan(records[0])

    def upsert(self, plan: DailyPlan) -> None:
        self._request(
            "POST",
            params={"on_conflict": "date"},
            json=plan_to_record(plan),
            headers={"Prefer": "resolution=merge-duplicates,return=minimal"},
        )
        logger.info("Plan saved to Supabase for %s", plan.date)

    def delete_older_than(self, cutoff_date: str) -> int:
        response = self._request(
            "DELETE",
            params={"date": f"lt.{cutoff_date}"},
            headers={"Prefer": "return=representation"},
        )
        count = len(self._records(response))
        if count:
            logger.info("Cleaned up %d old plans before %s", count, cutoff_date)
        return count

    def delete(self, plan_date: str) -> bool:
        response = self._request(
            "DELETE",
            params={"date": f"eq.{plan_date}"},
            headers={"Prefer": "return=representation"},
        )
        return bool(self._records(response))

    def list_plans(self) -> List[DailyPlan]:
        response = self._request("GET", params={"select": "*", "order": "date.desc"})
        return [record_to_plan(r) for r in self._records(response)]

    def close(self) -> None:
        self._client.close()
