from __future__ import annotations

import glob
import logging
from pathlib import Path
from typing import Callable, List, NamedTuple, Optional, Tuple, Union

import markdown

from models.docs import DocDeclaration, Docs
from utils.uri import resolve_uri

logger = logging.getLogger(__name__)

MarkdownRenderer = Callable[[str], str]


def render_markdown(source: str) -> str:
    return markdown.markdown(source)


class DocsResolution(NamedTuple):
    """Resolved docs; `complete` is False if some declared part could not be resolved."""
    docs: Docs
    complete: bool = True
    problems: Tuple[str, ...] = ()


class DocsGenerator:
    """
    Turns DocDeclarations into Docs.

    Links are resolved against the URI of the relation type they document.
    Includes are markdown files looked up below `include_root`, a glob
    pattern such as "/docs/*" relative to `search_path`, and rendered to
    HTML. A missing include is not an error: the docs just come without a
    detailed description.
    """

    def __init__(
            self,
            base_uri: str,
            include_root: str = "/docs/*",
            search_path: Union[str, Path] = ".",
            renderer: MarkdownRenderer = render_markdown
    ) -> None:
        self.base_uri = base_uri
        self.include_root = include_root
        self.search_path = Path(search_path)
        self._renderer = renderer

    def documentation_from(self, relation_type: str, declaration: Optional[DocDeclaration]) -> Docs:
        return self.resolve(relation_type, declaration).docs

    def resolve(self, relation_type: str, declaration: Optional[DocDeclaration]) -> DocsResolution:
        if declaration is None:
            return DocsResolution(Docs())

        relation_type = resolve_uri(self.base_uri, relation_type)
        problems: List[str] = []

        link = None
        if declaration.link:
            link = resolve_uri(relation_type, declaration.link)

        detailed_description = None
        if declaration.include:
            detailed_description = self._render_include(declaration.include)
            if detailed_description is None:
                problems.append(f"Include {declaration.include} not found below {self.include_root}")
                logger.warning(
                    "Documentation of %s: unable to read include %s below %s",
                    relation_type, declaration.include, self.include_root
                )

        docs = Docs(
            description=tuple(declaration.value),
            detailed_description=detailed_description,
            link=link,
        )
        return DocsResolution(docs, complete=not problems, problems=tuple(problems))

    def find_include(self, include: str) -> Optional[Path]:
        """Path of the include file, or None if no include directory has it."""
        relative = include.lstrip("/")
        if not relative:
            return None
        for directory in self._include_directories():
            candidate = (directory / relative).resolve()
            try:
                candidate.relative_to(directory.resolve())
            except ValueError:
                # ../ outside of the include root
                continue
            if candidate.is_file():
                return candidate
        return None

    def _include_directories(self) -> List[Path]:
        pattern = self.include_root.lstrip("/")
        static_parts = []
        for part in Path(pattern).parts:
            if glob.has_magic(part):
                break
            static_parts.append(part)
        directories = [self.search_path.joinpath(*static_parts)]
        if glob.has_magic(pattern):
            directories += sorted(p for p in self.search_path.glob(pattern) if p.is_dir())
        return directories

    def _render_include(self, include: str) -> Optional[str]:
        path = self.find_include(include)
        if path is None:
            return None
        try:
            with path.open(encoding="utf-8") as f:
                source = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Unable to read %s: %s", path, e)
            return None
        return self._renderer(source)
