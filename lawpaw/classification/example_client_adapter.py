"""Offline classification client.

Returns a fixed, schema-complete response without any network call. Used for
local development and dry runs, and as the template for new provider
adapters: implement BaseClassificationClient and register the provider in
ClassifierFactory.
"""

import json
from typing import ClassVar

from lawpaw.classification.client_base import BaseClassificationClient


class ExampleClientAdapter(BaseClassificationClient):
    """Adapter that always answers with DEFAULT_RESPONSE."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "document_type": "motion",
        "filing_date": "2024-04-01",
        "moving_party": "Example Plaintiff",
        "responding_party": "Example Defendant",
        "court": "Example District Court",
        "jurisdiction": "Federal",
        "judge": "Judge Example",
        "docket_number": "CV-0000-0000",
        "case_name": "Example Plaintiff v. Example Defendant",
        "cause_of_action": "Breach of Contract",
        "relief_sought": "Damages",
        "filing_attorney": "Example Attorney",
        "summary": "Example motion for summary judgment",
        "tags": "example,motion",
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt, json_schema
        return json.dumps(self.DEFAULT_RESPONSE)
