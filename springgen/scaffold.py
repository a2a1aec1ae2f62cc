"""Scaffolding orchestrator.

Drives one run of the tool:

1. Fetch the Initializr metadata.
2. Ask the user for the project details.
3. Show a summary and ask for confirmation.
4. Download the generated archive and unpack it under a spinner.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from rich.console import Console
from rich.prompt import Confirm

from springgen.archive import ExtractionError, check_target_available, extract_archive
from springgen.config import Config
from springgen.form import ProjectForm
from springgen.initializr import InitializrClient, InitializrError, Metadata, ProjectRequest
from springgen.utils import console as default_console
from springgen.utils import create_spinner, print_summary_table

logger = logging.getLogger(__name__)


class ScaffoldError(Exception):
    """Raised when a scaffolding step fails irrecoverably."""

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        super().__init__(f"{step}: {message}")


class Scaffolder:
    """Generates one Spring Boot project from user answers.

    Attributes:
        config: Global configuration.
        client: Async Initializr client.
        assume_yes: Skip the confirmation prompt.
    """

    def __init__(
        self,
        config: Config,
        client: InitializrClient | None = None,
        console: Console | None = None,
        assume_yes: bool = False,
    ) -> None:
        self.config = config
        self.client = client or InitializrClient(
            base_url=config.base_url,
            timeout=config.timeout,
            accept=config.metadata_accept,
        )
        self.console = console or default_console
        self.assume_yes = assume_yes

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def load_metadata(self) -> Metadata:
        """Fetch the option catalogue from the service."""
        try:
            with create_spinner("Loading Spring Initializr metadata..."):
                return await self.client.fetch_metadata()
        except InitializrError as exc:
            raise ScaffoldError("metadata", str(exc)) from exc

    def collect(self, metadata: Metadata) -> ProjectRequest:
        """Run the interactive form and fill blanks with service defaults."""
        form = ProjectForm(
            metadata,
            defaults=self.config.defaults,
            base_dir=self.config.output_dir,
            console=self.console,
        )
        return form.ask().with_defaults(metadata)

    def confirm(self, request: ProjectRequest) -> bool:
        """Show what will be generated and ask the user to go ahead."""
        print_summary_table(
            {
                "Name": request.name,
                "Group / Artifact": f"{request.group_id}:{request.artifact_id}",
                "Package": request.package_name,
                "Language": request.language,
                "Java": request.java_version,
                "Spring Boot": request.boot_version,
                "Type": request.project_type,
                "Packaging": request.packaging,
                "Dependencies": ", ".join(request.dependencies) or "-",
            },
            title="Project",
        )
        if self.assume_yes:
            return True
        return Confirm.ask("Generate project?", default=True, console=self.console)

    async def generate(self, request: ProjectRequest) -> Path:
        """Download the archive for ``request`` and unpack it.

        Returns:
            Path to the new project directory.
        """
        try:
            check_target_available(request.name, self.config.output_dir)
        except ExtractionError as exc:
            raise ScaffoldError("generate", str(exc)) from exc

        try:
            with create_spinner("Generating project..."):
                data = await self.client.download_project(request)
                root = await asyncio.to_thread(
                    extract_archive, data, request.name, self.config.output_dir
                )
        except InitializrError as exc:
            raise ScaffoldError("generate", str(exc)) from exc
        except ExtractionError as exc:
            raise ScaffoldError("extract", str(exc)) from exc

        logger.debug("Project written to %s", root)
        return root

    # ------------------------------------------------------------------
    # Full run
    # ------------------------------------------------------------------

    def run(self) -> Path | None:
        """Execute every step.

        The network steps each get their own event loop; the prompts run
        between them on the main thread, outside any loop.

        Returns:
            The project directory, or ``None`` if the user cancelled.
        """
        metadata = asyncio.run(self.load_metadata())
        request = self.collect(metadata)
        if not self.confirm(request):
            logger.info("Generation cancelled by user")
            return None
        return asyncio.run(self.generate(request))
