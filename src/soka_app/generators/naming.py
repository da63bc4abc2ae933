import keyword
import re

from pydantic import BaseModel

from soka_app.errors import InvalidNameError

IDENTIFIER_PATTERN = re.compile(r"^[a-z_][a-z0-9_]*$")


def is_identifier(name: str) -> bool:
    return bool(IDENTIFIER_PATTERN.match(name)) and not keyword.iskeyword(name)


def underscore(name: str) -> str:
    """Convert `CustomerSupport`, `customer-support` or `customer support` to `customer_support`."""
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name.strip())
    name = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name)
    return re.sub(r"[-\s]+", "_", name).lower()


def camelize(name: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in underscore(name).split("_") if part)


def normalize_file_name(name: str, suffix: str) -> str:
    """Return the file name for `name` ending with exactly one `_<suffix>`."""
    base_name = underscore(name).removesuffix(f"_{suffix}")
    return f"{base_name}_{suffix}"


def normalize_class_name(name: str, suffix: str) -> str:
    """Return the class name for `name` ending with exactly one `<Suffix>`."""
    class_suffix = camelize(suffix)
    base_class = camelize(name).removesuffix(class_suffix)
    return f"{base_class}{class_suffix}"


class GeneratedName(BaseModel):
    class_path: list[str]
    file_name: str
    class_name: str

    @property
    def module_path(self) -> str:
        return ".".join([*self.class_path, self.file_name])

    @property
    def directory(self) -> str:
        return "/".join(self.class_path)


def parse_name(name: str, suffix: str) -> GeneratedName:
    """Split `admin/customer_support` into its namespace directories and a normalized file and class name."""
    parts: list[str] = [underscore(part) for part in re.split(r"[/.]|::", name) if part.strip()]

    if not parts:
        raise InvalidNameError(name=name, reason="the name is empty")

    for part in parts:
        if not is_identifier(part):
            raise InvalidNameError(name=name, reason=f"{part!r} is not a valid Python identifier")

    *class_path, base_name = parts

    if base_name == suffix:
        raise InvalidNameError(name=name, reason=f"the name is only the {suffix!r} suffix")

    return GeneratedName(
        class_path=class_path,
        file_name=normalize_file_name(base_name, suffix),
        class_name=normalize_class_name(base_name, suffix),
    )
