"""JSON layout document transformer."""

import json
from dataclasses import asdict
from typing import Any, Optional, Sequence

from timetable.models import Configs, LaidOutEvent

from .base import BaseTransformer


class JsonTransformer(BaseTransformer):
    """Transformer that writes the grid layout as a JSON document for renderers."""
    
    EVENT_MARGIN = 3  # horizontal gap left between neighbouring cards
    
    def __init__(self, margin: float = EVENT_MARGIN, indent: Optional[int] = 2) -> None:
        """Initialize the JSON transformer.
        
        Args:
            margin: Pixels taken off each card's width so that cards sharing
                a day column do not touch.
            indent: JSON indentation, ``None`` for compact output.
        """
        self._margin = margin
        self._indent = indent
        self._document: Optional[dict[str, Any]] = None
    
    def _event_record(self, item: LaidOutEvent) -> dict[str, Any]:
        record = {k: v for k, v in asdict(item.event).items() if v not in (None, "")}
        record["label"] = item.event.label
        record["slot"] = asdict(item.slot)
        record["rect"] = {
            "x": item.rect.x,
            "y": item.rect.y,
            "width": max(item.rect.width - self._margin, 0),
            "height": item.rect.height,
        }
        return record
    
    def transform(self, laid_out: Sequence[LaidOutEvent], configs: Configs) -> dict[str, Any]:
        """Build the layout document.
        
        Returns:
            Dictionary with the configs (including ``num_of_hours``) and one
            record per event in input order.
        """
        configs_record = asdict(configs)
        configs_record["num_of_hours"] = configs.num_of_hours
        
        self._document = {
            "configs": configs_record,
            "events": [self._event_record(item) for item in laid_out],
        }
        return self._document
    
    def dumps(self) -> str:
        if self._document is None:
            raise RuntimeError("No layout data. Call transform() first.")
        return json.dumps(self._document, indent=self._indent, ensure_ascii=False)
    
    def save(self, output_path: str) -> None:
        """Save the layout document to a .json file.
        
        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        text = self.dumps()
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text)
            f.write("\n")
