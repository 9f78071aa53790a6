"""
Demo script for the dashboard assistant.

Runs an interactive terminal session over the ActionDispatcher. With
OPENAI_API_KEY set (environment or project .env) the language model interprets
requests; without it the local keyword interpreter is used.
"""

import argparse
import asyncio
from pathlib import Path

import utils  # noqa: F401  (loads the project .env)
from assistant.dispatcher import ActionDispatcher, RecordingNavigator
from assistant.state_store import JsonFilePersistence
from config.config import AssistantConfig
from utils.logger import get_logger

logger = get_logger("assistant_demo")
get_logger("assistant")

SCRIPTED_TURNS = [
    "hola",
    "llévame a inventario",
    "muéstrame ventas por región en gráfica de pastel",
    "genera un reporte de ventas",
    "camisa XL",
    "ayuda",
]


def render(result) -> str:
    lines = [f"Asistente: {result.message.content}"]
    data = result.message.chart_data
    if data is not None and data.datasets:
        lines.append(f"  [{result.message.chart_kind.value}] {data.options.title}")
        for label, value in zip(data.labels, data.datasets[0].values):
            lines.append(f"    {label:<20} {value:>10,.2f}")
    if result.scheduled_navigation:
        lines.append(f"  -> navegación programada a {result.scheduled_navigation}")
    return "\n".join(lines)


async def run_demo(scripted: bool, state_file: Path | None):
    config = AssistantConfig.from_env()
    navigator = RecordingNavigator()
    persistence = JsonFilePersistence(state_file) if state_file else None
    dispatcher = ActionDispatcher.from_config(config, navigator=navigator, persistence=persistence)
    mode = f"language model {config.model}" if dispatcher.adapter.available else "local interpreter"
    logger.info(f"Assistant demo started using the {mode}")

    async def handle(text: str):
        result = await dispatcher.submit(text)
        if result is not None:
            print(render(result))
            await asyncio.sleep(config.filter_navigation_delay if result.scheduled_navigation else 0)
            print(f"  (ruta actual: {navigator.current_path})")

    if scripted:
        for text in SCRIPTED_TURNS:
            print(f"\nUsuario: {text}")
            await handle(text)
        return

    print("Escribe tu mensaje ('salir' para terminar, 'limpiar' para borrar el chat).")
    while True:
        text = await asyncio.to_thread(input, "\nUsuario: ")
        command = text.strip().lower()
        if command in {"salir", "exit", "quit"}:
            break
        if command == "limpiar":
            dispatcher.clear_conversation()
            continue
        await handle(text)


def main():
    parser = argparse.ArgumentParser(description="Dashboard assistant demo")
    parser.add_argument("--scripted", action="store_true", help="Run a fixed list of requests")
    parser.add_argument("--state-file", type=Path, help="Persist UI state to this JSON file")
    args = parser.parse_args()
    asyncio.run(run_demo(args.scripted, args.state_file))


if __name__ == "__main__":
    main()
