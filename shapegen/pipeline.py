"""Pipeline orchestration for extraction runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .config import ShapeGenConfig
from .discovery import SourceDiscoverer
from .emitter import Emitter, Printer
from .errors import ExtractionError, MissingSourceFileError
from .filtering import DeclarationFilter
from .logging import get_logger, processing_file
from .models import EmittableDeclaration
from .parsing import TypeScriptParser
from .program import Program
from .transform import ClassShapeTransformer


@dataclass
class FileOutcome:
    """Result of processing one source file."""

    source: Path
    destination: Path
    declarations: List[EmittableDeclaration]


@dataclass
class RunResult:
    """Outcome of a whole extraction run."""

    output_root: Path
    dry_run: bool
    files: List[FileOutcome] = field(default_factory=list)


class Pipeline:
    """Discovers, parses, filters and emits every source file, one at a time."""

    def __init__(
        self,
        parser: TypeScriptParser | None = None,
        printer: Printer | None = None,
    ) -> None:
        self.parser = parser or TypeScriptParser()
        self.printer = printer or Printer()
        self.logger = get_logger("pipeline")

    def run(self, config: ShapeGenConfig, *, dry_run: bool = False) -> RunResult:
        source_dir = config.source_dir
        output_root = config.output_dir
        self.logger.info("Discovering sources under %s", source_dir)
        discoverer = SourceDiscoverer(
            extensions=config.extensions,
            exclude_paths=config.exclude_paths,
            skip_dirs=[output_root],
        )
        files = discoverer.discover(source_dir)
        self.logger.debug("Discovered %d source files", len(files))

        program = Program.load(files, self.parser)
        declaration_filter = DeclarationFilter(ClassShapeTransformer(program.symbol_index))
        emitter = Emitter(config.root_folder.resolve(), output_root, self.printer)

        result = RunResult(output_root=output_root, dry_run=dry_run)
        for path in files:
            self.logger.info("Processing file %s", path)
            source_file = program.get_source_file(path)
            if source_file is None:
                raise MissingSourceFileError(path)
            if source_file.has_errors:
                self.logger.warning(
                    "Syntax errors in %s; statements that fail to parse are dropped", path
                )
            try:
                with processing_file(path):
                    declarations = declaration_filter.filter(source_file)
                    if dry_run:
                        destination = emitter.output_path(path)
                    else:
                        destination = emitter.write(path, declarations)
            except Exception as exc:
                raise ExtractionError(path, exc) from exc
            result.files.append(
                FileOutcome(source=path, destination=destination, declarations=declarations)
            )

        self.logger.info("Processed %d files into %s", len(result.files), output_root)
        return result


__all__ = ["FileOutcome", "Pipeline", "RunResult"]
