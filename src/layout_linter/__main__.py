"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from layout_linter.infrastructure.di.container import LayoutLinterContainer
from layout_linter.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = LayoutLinterContainer()

    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        telemetry=container.get_telemetry_port(),
        filesystem=container.get_filesystem_gateway(),
        estree_gateway=container.get_estree_gateway(),
        fixer_gateway=container.get_fixer_gateway(),
        guidance_service=container.get_guidance_service(),
        reporter=container.get_reporter(),
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
