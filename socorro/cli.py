"""Interface de linha de comando para operar o Socorro."""
from __future__ import annotations

import argparse
import logging
from typing import Sequence

from dotenv import load_dotenv
from pymongo.errors import PyMongoError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from socorro.container import SocorroContainer, build_container, ensure_database_indexes
from socorro.domain.errors import LocationNotFound, PersistenceError
from socorro.infrastructure.database import MongoClientFactory
from socorro.settings import get_log_level


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Socorro - coordenação de ocorrências")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Nível de log (default: SOCORRO_LOG_LEVEL ou INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("serve", help="Executa a API HTTP/WebSocket com o Uvicorn")

    geocode = subparsers.add_parser(
        "geocode", help="Extrai a localização de um texto e retorna as coordenadas"
    )
    geocode.add_argument("text", help="Texto livre mencionando um local")

    verify = subparsers.add_parser(
        "verify-image", help="Avalia a autenticidade de uma imagem e atualiza os relatos"
    )
    verify.add_argument("image_url", help="URL da imagem")

    subparsers.add_parser("official-updates", help="Lista os boletins oficiais em cache")
    subparsers.add_parser(
        "ensure-indexes", help="Cria os índices das coleções MongoDB (inclusive o TTL do cache)"
    )

    resources = subparsers.add_parser(
        "resources", help="Lista recursos de uma ocorrência, opcionalmente por proximidade"
    )
    resources.add_argument("disaster_id", help="Identificador da ocorrência")
    resources.add_argument("--lat", type=float, default=None)
    resources.add_argument("--lng", type=float, default=None)
    resources.add_argument(
        "--radius", type=float, default=None, help="Raio em metros (default: 10000)"
    )

    return parser.parse_args(argv)


def configure_logging(console: Console, level_name: str | None) -> None:
    level_name = level_name or get_log_level()
    handler = RichHandler(console=console, markup=True, rich_tracebacks=True)
    logging.basicConfig(
        level=getattr(logging, str(level_name).upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    console = Console()
    configure_logging(console, args.log_level)

    if args.command == "serve":
        from socorro.api import run

        run()
        return 0
    if args.command == "ensure-indexes":
        return _ensure_indexes(console)

    container = build_container()
    try:
        return _dispatch(args, container, console)
    except PersistenceError as exc:
        console.print(f"[red]{exc}[/red]")
        return 1
    finally:
        container.close()


def _ensure_indexes(console: Console) -> int:
    factory = MongoClientFactory()
    try:
        names = ensure_database_indexes(factory.get_database())
    except PyMongoError as exc:
        console.print(f"[red]Falha ao criar índices: {exc}[/red]")
        return 1
    finally:
        factory.close()
    console.print(f"[green]Índices garantidos em: {', '.join(names)}[/green]")
    return 0


def _dispatch(args: argparse.Namespace, container: SocorroContainer, console: Console) -> int:
    if args.command == "geocode":
        try:
            result = container.geocode_orchestrator.resolve(args.text)
        except LocationNotFound as exc:
            console.print(f"[yellow]{exc}[/yellow]")
            return 1
        console.print_json(data=result.to_mapping())
    elif args.command == "verify-image":
        verification = container.image_verifier.verify(args.image_url)
        console.print_json(data=verification.to_mapping())
    elif args.command == "official-updates":
        bulletins = container.bulletin_aggregator.fetch()
        if not bulletins:
            console.print("[yellow]Nenhum boletim disponível no momento.[/yellow]")
            return 0
        table = Table(title="Boletins oficiais")
        table.add_column("Fonte", style="bold")
        table.add_column("Título")
        table.add_column("URL", overflow="fold")
        for bulletin in bulletins:
            table.add_row(bulletin.source, bulletin.title, bulletin.url)
        console.print(table)
    elif args.command == "resources":
        resources = container.resource_locator.locate(
            args.disaster_id,
            lat=args.lat,
            lng=args.lng,
            radius_meters=args.radius,
        )
        if not resources:
            console.print("[yellow]Nenhum recurso encontrado para a ocorrência.[/yellow]")
            return 0
        table = Table(title=f"Recursos da ocorrência {args.disaster_id}")
        table.add_column("Nome", style="bold")
        table.add_column("Tipo")
        table.add_column("Local")
        table.add_column("Distância (m)", justify="right")
        for resource in resources:
            distance = (
                f"{resource.distance_meters:.0f}"
                if resource.distance_meters is not None
                else "-"
            )
            table.add_row(
                resource.name,
                resource.type or "-",
                resource.location_name or "-",
                distance,
            )
        console.print(table)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
