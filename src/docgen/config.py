"""docgen configuration.

DocgenConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path

from docgen._errors import ConfigError

LANG_PLACEHOLDER = "{lang}"


@dataclass(frozen=True, slots=True)
class DocgenConfig:
    """Configuration for a docgen project.

    Attributes:
        root: Project root directory. Always resolved to an absolute path on
              construction; every relative directory below resolves against it.
        base_dir: Source root. Per-document outputs mirror the tree below it
            inside ``docgen_dir``.
        origin_content_dir: Directory holding ``<lang>/...`` markdown sources.
            This is the directory that is scanned and watched.
        docgen_dir: Output root for generated JSON.
        languages: Language tags initialized in the content store.
        ignore_files: Path substrings; matching sources are never compiled.
        split_string: Separator between the content and example sections
            of a document body.
        combined_content_file: Output template for the combined map.
        ordered_content_file: Output template for the ordered list.
        menu_content_file: Output template for the menu tree.
        debounce_ms: Watcher debounce window in milliseconds.

    The three output templates must contain a ``{lang}`` placeholder.

    """

    root: Path = field(default_factory=Path.cwd)
    base_dir: str = "src"
    origin_content_dir: str = "src/content"
    docgen_dir: str = "docgen"
    languages: tuple[str, ...] = ("en",)
    ignore_files: tuple[str, ...] = ()
    split_string: str = "<!-- example -->"
    combined_content_file: str = "docgen/{lang}.combined.json"
    ordered_content_file: str = "docgen/{lang}.ordered.json"
    menu_content_file: str = "docgen/{lang}.menu.json"
    debounce_ms: int = 300

    def __post_init__(self) -> None:
        # Resolve root to absolute so that watchfiles (which returns
        # absolute paths) can be compared via Path.relative_to().
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        object.__setattr__(self, "languages", tuple(self.languages))
        object.__setattr__(self, "ignore_files", tuple(self.ignore_files))

        if not self.languages:
            msg = "At least one language must be configured"
            raise ConfigError(msg)
        if not self.split_string:
            msg = "split_string must not be empty"
            raise ConfigError(msg)
        if not self.content_path.is_relative_to(self.base_path):
            msg = f"origin_content_dir {self.content_path} must lie inside base_dir {self.base_path}"
            raise ConfigError(msg)
        for name in ("combined_content_file", "ordered_content_file", "menu_content_file"):
            if LANG_PLACEHOLDER not in getattr(self, name):
                msg = f"{name} must contain a {LANG_PLACEHOLDER} placeholder"
                raise ConfigError(msg)

    def _resolve(self, value: str) -> Path:
        path = Path(value)
        if path.is_absolute():
            return path
        return self.root / path

    @property
    def base_path(self) -> Path:
        """Absolute path to the source root."""
        return self._resolve(self.base_dir)

    @property
    def content_path(self) -> Path:
        """Absolute path to the watched content directory."""
        return self._resolve(self.origin_content_dir)

    @property
    def output_path(self) -> Path:
        """Absolute path to the output directory."""
        return self._resolve(self.docgen_dir)

    def output_file(self, template: str, language: str) -> Path:
        """Absolute path of a per-language artifact built from ``template``."""
        return self._resolve(template.replace(LANG_PLACEHOLDER, language))
