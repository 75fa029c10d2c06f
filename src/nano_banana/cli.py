"""Command line interface for the Nano Banana client."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import typer
from dotenv import load_dotenv

from .builders import PhotographyPromptBuilder, StickerPromptBuilder, build_illustration_prompt
from .config import GeminiSettings
from .errors import NanoBananaError
from .gemini_client import NanoBananaClient
from .generator import PromptGenerator
from .models import ImageModel
from .response import NanoBananaResponse
from .templates import default_registry
from .utils import setup_logging

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="Generate images with Gemini (Nano Banana) from prompts, builders and templates.")

OUTPUT_OPTION = typer.Option(Path("output.png"), "--output", "-o", help="Where to save the generated image.")
MODEL_OPTION = typer.Option(None, "--model", "-m", help="Model value or name (overrides GEMINI_IMAGE_MODEL).")
DRY_RUN_OPTION = typer.Option(False, help="Print the prompt without calling the API.")


@app.callback()
def _init(ctx: typer.Context, verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")) -> None:
    """Initialize logging for all commands."""

    setup_logging(level=10 if verbose else 20)  # 10=DEBUG, 20=INFO
    ctx.obj = {}


def _client(model: Optional[str]) -> NanoBananaClient:
    settings = GeminiSettings.from_env()
    if model:
        settings.model = ImageModel.parse(model)
    return NanoBananaClient.from_settings(settings)


def _report(result: NanoBananaResponse, output: Path) -> None:
    typer.echo(f"Saved: {output}")
    typer.echo(f"Model: {result.model_version}  Response: {result.response_id}")
    typer.echo(
        f"Tokens: prompt={result.prompt_token_count} candidates={result.candidates_token_count} "
        f"thoughts={result.thoughts_token_count} total={result.total_token_count}"
    )


def _fail(exc: Exception) -> None:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=1)


def _parse_vars(pairs: List[str]) -> Dict[str, str]:
    variables = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected KEY=VALUE, got '{pair}'", param_hint="--var")
        variables[key.strip()] = value
    return variables


def _run(prompt: str, output: Path, model: Optional[str], dry_run: bool, images: Optional[List[str]] = None) -> None:
    if dry_run:
        typer.echo(prompt)
        return
    try:
        client = _client(model)
        if images:
            result = client.edit_image(prompt, images, output)
        else:
            result = client.generate_image(prompt, output)
    except (NanoBananaError, ValueError) as exc:
        _fail(exc)
    else:
        _report(result, output)


@app.command()
def generate(
    prompt: str = typer.Argument(..., help="Prompt text."),
    output: Path = OUTPUT_OPTION,
    model: Optional[str] = MODEL_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Generate an image from a text prompt."""

    _run(prompt, output, model, dry_run)


@app.command()
def edit(
    prompt: str = typer.Argument(..., help="Edit instructions."),
    images: List[str] = typer.Argument(..., help="Reference image paths or URLs."),
    output: Path = OUTPUT_OPTION,
    model: Optional[str] = MODEL_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Edit or combine reference images with a text prompt."""

    _run(prompt, output, model, dry_run, images=images)


@app.command()
def photo(
    subject: str = typer.Argument(..., help="What the photo shows."),
    preset: Optional[str] = typer.Option(None, help="portrait, landscape, macro, street or studio."),
    camera_angle: Optional[str] = typer.Option(None, "--camera-angle"),
    lens_type: Optional[str] = typer.Option(None, "--lens"),
    lighting: Optional[str] = typer.Option(None),
    mood: Optional[str] = typer.Option(None),
    background: Optional[str] = typer.Option(None),
    style: Optional[str] = typer.Option(None),
    quality: Optional[str] = typer.Option(None),
    detail: List[str] = typer.Option([], "--detail", "-d", help="Extra detail; repeatable."),
    output: Path = OUTPUT_OPTION,
    model: Optional[str] = MODEL_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Generate a photorealistic image."""

    params = {
        "camera_angle": camera_angle,
        "lens_type": lens_type,
        "lighting": lighting,
        "mood": mood,
        "background": background,
        "style": style,
        "quality": quality,
        "details": detail,
        "preset": preset,
    }
    prompt = PhotographyPromptBuilder.from_params(subject, params).build()
    _run(prompt, output, model, dry_run)


@app.command()
def sticker(
    subject: str = typer.Argument(..., help="What the sticker shows."),
    preset: Optional[str] = typer.Option(None, help="kawaii, minimalist, vintage, professional or playful."),
    style: Optional[str] = typer.Option(None),
    background: Optional[str] = typer.Option(None),
    outline: Optional[str] = typer.Option(None),
    shading: Optional[str] = typer.Option(None),
    color_palette: Optional[str] = typer.Option(None, "--palette"),
    size: Optional[str] = typer.Option(None),
    mood: Optional[str] = typer.Option(None),
    detail: List[str] = typer.Option([], "--detail", "-d", help="Extra detail; repeatable."),
    output: Path = OUTPUT_OPTION,
    model: Optional[str] = MODEL_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Generate a sticker."""

    params = {
        "style": style,
        "background": background,
        "outline": outline,
        "shading": shading,
        "color_palette": color_palette,
        "size": size,
        "mood": mood,
        "details": detail,
        "preset": preset,
    }
    try:
        prompt = StickerPromptBuilder.from_params(subject, params).build()
    except NanoBananaError as exc:
        _fail(exc)
    else:
        _run(prompt, output, model, dry_run)


@app.command()
def illustration(
    subject: str = typer.Argument(..., help="What the illustration shows."),
    style: str = typer.Option("anime", help="anime, realistic, cartoon or watercolor."),
    background: str = typer.Option("detailed"),
    quality: str = typer.Option("high"),
    mood: str = typer.Option("cheerful"),
    composition: str = typer.Option("balanced"),
    output: Path = OUTPUT_OPTION,
    model: Optional[str] = MODEL_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Generate an illustration."""

    params = {
        "style": style,
        "background": background,
        "quality": quality,
        "mood": mood,
        "composition": composition,
    }
    _run(build_illustration_prompt(subject, params), output, model, dry_run)


@app.command()
def template(
    key: str = typer.Argument(..., help="Template key (see `templates`)."),
    var: List[str] = typer.Option([], "--var", help="KEY=VALUE override; repeatable."),
    vars_json: Optional[Path] = typer.Option(None, "--vars-json", help="JSON file with variable overrides."),
    templates_file: Optional[Path] = typer.Option(None, "--templates-file", help="YAML file with extra templates."),
    output: Path = OUTPUT_OPTION,
    model: Optional[str] = MODEL_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Render a registered template and generate an image from it."""

    try:
        registry = default_registry()
        if templates_file:
            registry.register_file(templates_file)
        generator = PromptGenerator(registry.create(key))
        if vars_json:
            generator.import_variables_from_json(vars_json.read_text(encoding="utf-8"))
        generator.set_variables(_parse_vars(var))
        prompt = generator.generate()
    except (NanoBananaError, FileNotFoundError, ValueError) as exc:
        _fail(exc)
    else:
        _run(prompt, output, model, dry_run)


@app.command(name="templates")
def list_templates(
    templates_file: Optional[Path] = typer.Option(None, "--templates-file", help="YAML file with extra templates."),
) -> None:
    """List available templates and their required variables."""

    registry = default_registry()
    try:
        if templates_file:
            registry.register_file(templates_file)
    except (FileNotFoundError, ValueError) as exc:
        _fail(exc)

    for key in registry.list_keys():
        info = PromptGenerator(registry.create(key)).show_variable_info()
        required = ", ".join(info["required_variables"]) or "-"
        typer.echo(f"{key}: {info['template_name']} (required: {required})")


if __name__ == "__main__":  # pragma: no cover
    app()
