"""What a generation run can produce."""

from enum import Enum

from schmiede.exceptions import ParseError


class GenerateOption(Enum):
    SQL = "sql"
    STRUCT = "struct"
    ROUTES = "routes"
    ADMIN = "admin"

    @property
    def requires_id(self) -> bool:
        return self in (GenerateOption.SQL, GenerateOption.STRUCT)

    @property
    def requires_attributes(self) -> bool:
        return self in (GenerateOption.SQL, GenerateOption.STRUCT)

    @property
    def requires_operations(self) -> bool:
        return self == GenerateOption.ROUTES

    @property
    def requires_driver(self) -> bool:
        return self != GenerateOption.ADMIN

    @classmethod
    def parse_list(cls, text: str) -> list["GenerateOption"]:
        """Parse ``sql,struct`` style lists, dropping repeats."""
        options: list[GenerateOption] = []
        for part in text.split(","):
            part = part.strip().lower()
            if not part:
                continue
            try:
                option = cls(part)
            except ValueError as exc:
                raise ParseError(
                    f"Invalid option '{part}'. "
                    f"Expected one of: {', '.join(o.value for o in cls)}"
                ) from exc
            if option not in options:
                options.append(option)
        if not options:
            raise ParseError("No generate options given")
        return options
