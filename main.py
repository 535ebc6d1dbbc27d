"""
main.py — Bootstrap

1. Load tuning
2. Load the level (data/map.toml)
3. Create the world and the player
4. Push the mining scene
5. Run
"""

from pathlib import Path

from core import tuning
from core.app import App
from core.constants import TILE_WIDTH, TILE_HEIGHT
from core.tilemap import TileMap
from logic.player import new_world, spawn_player
from scenes.mine_scene import MineScene

MAP_PATH = Path(__file__).resolve().parent / "data" / "map.toml"

# Where the player appears: the top of the sky, column 2
SPAWN_TILE = (2, 0)


def load_map(path: Path = MAP_PATH) -> TileMap:
    """The level from *path*, or a plain 40×24 sky-over-earth map."""
    if path.exists():
        return TileMap.from_toml(path)
    print(f"[MAP] {path} not found — using the built-in flat map")
    return TileMap.layered(
        40, 24, sky_rows=5,
        tile_width=tuning.get("tiles", "width", TILE_WIDTH),
        tile_height=tuning.get("tiles", "height", TILE_HEIGHT),
    )


def main():
    tuning.load()

    tmap = load_map()
    world = new_world(tmap)
    player = spawn_player(world, *SPAWN_TILE)

    app = App(
        title=tuning.get("app", "title", "Digger"),
        width=tuning.get("app", "width", 960),
        height=tuning.get("app", "height", 640),
        fps=tuning.get("app", "fps", 60),
        world=world,
    )
    app.push_scene(MineScene(player))
    app.run()


if __name__ == "__main__":
    main()
