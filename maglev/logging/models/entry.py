from typing import TypedDict

import msgspec

from .log_level import LogLevel


class TemplateContext(TypedDict, total=False):
    filename: str
    function_name: str
    line_number: int
    thread_id: int
    timestamp: str
    error: str


class Entry(msgspec.Struct, kw_only=True):
    message: str | None = None
    level: LogLevel

    def to_template(
        self,
        template: str,
        context: TemplateContext | None = None,
    ) -> str:
        # Entry fields (table_size, quotas, moved_slots, ...) and caller
        # context share one namespace, context wins on collisions.
        fields: dict[str, object] = {
            field: getattr(self, field) for field in self.__struct_fields__
        }
        fields["level"] = self.level.value

        if context:
            fields.update(context)

        return template.format(**fields)
