"""
Command line front end.

    python -m coda_client create 3
    python -m coda_client watch ROOMID --register
"""
import argparse
import asyncio

from coda_client.api import RoomApi
from coda_client.config import Settings, configure_logging
from coda_client.room_view import Lobby, RoomView


async def _create(settings: Settings, num_players: int) -> None:
    async with RoomApi(settings) as api:
        print(await Lobby(api).create_room(num_players))


async def _watch(settings: Settings, room_id: str, register: bool) -> None:
    async with RoomApi(settings) as api:
        async with RoomView(api) as view:
            printed = 0

            def show(snapshot) -> None:
                nonlocal printed
                for line in view.descriptions[printed:]:
                    print(f"* {line}")
                printed = len(view.descriptions)
                if snapshot is not None:
                    print(view.render())

            view.store.subscribe(show)
            await view.enter(room_id)
            if register and view.can_register:
                await view.on_register()
            await view.wait_closed()


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(prog="coda_client")
    commands = parser.add_subparsers(dest="command", required=True)
    create = commands.add_parser("create", help="create a room and print its id")
    create.add_argument("num_players", type=int, choices=[2, 3, 4])
    watch = commands.add_parser("watch", help="follow a room until the server hangs up")
    watch.add_argument("room_id")
    watch.add_argument("--register", action="store_true", help="take a seat if one is free")
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    if args.command == "create":
        asyncio.run(_create(settings, args.num_players))
    else:
        asyncio.run(_watch(settings, args.room_id, args.register))


if __name__ == "__main__":
    main()
