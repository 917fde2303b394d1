"""
Completion items for discovered actions.

Each item carries the edit that imports its action, so accepting a
completion also adds (or extends) the matching import statement.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .buffers import Buffer
from .import_name import ImportNameRecord
from .parser import Parser
from .planner import plan_import_edit
from .types import Edit


@dataclass(frozen=True)
class CompletionItem:
    label: str
    kind: str = "function"
    detail: str = ""
    filter_text: str = ""
    documentation: str = ""
    additional_edits: List[Edit] = field(default_factory=list)


class ActionCompleter:
    """Offers every known action on lines mentioning the trigger keyword."""

    def __init__(self, records: Sequence[ImportNameRecord], parser: Optional[Parser] = None,
                 trigger: str = "dispatch"):
        self.records = list(records)
        self.parser = parser
        self.trigger = trigger

    def provide_completion_items(self, buffer: Buffer, line: int) -> List[CompletionItem]:
        if self.trigger not in buffer.get_line_text(line):
            return []

        items = []
        for record in self.records:
            # Local names are relative to the document, which needs a path
            if record.mode == "local" and buffer.file_path is None:
                continue
            import_name = record.import_name_for(buffer.file_path)
            for action in record.actions:
                items.append(CompletionItem(
                    label=action,
                    detail=record.file_name,
                    filter_text=f"__{record.file_name}",
                    documentation=f"Redux action declared in {record.module_name}",
                    additional_edits=[plan_import_edit(buffer, import_name, action, self.parser)],
                ))
        return items
