"""Generator configuration models and TOML loading."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator


class IslandConfig(BaseModel):
    """Island terrain parameters."""

    model_config = ConfigDict(frozen=True)

    # Noise
    noise_scale: float = Field(
        default=0.01, gt=0, description="Zoom level (lower = larger features)"
    )
    noise_octaves: int = Field(default=4, ge=1, le=8, description="Number of detail layers")
    noise_persistence: float = Field(
        default=0.5, gt=0, description="Amplitude decay per octave"
    )
    noise_lacunarity: float = Field(
        default=2.0, gt=0, description="Frequency multiplier per octave"
    )

    # Island shape
    island_size: float = Field(
        default=0.8, gt=0, le=1, description="Island radius (1.0 = fills the map)"
    )
    island_falloff: float = Field(
        default=2.0, gt=0, description="Coastline sharpness (higher = sharper)"
    )
    island_threshold: float = Field(
        default=0.3, ge=-1, le=1, description="Water/land cutoff in noise units"
    )

    # Tile ids
    water_id: int = Field(default=4608, gt=0, description="Water ground item id")
    ground_id: int = Field(default=4526, gt=0, description="Land ground item id")

    # Cleanup
    enable_cleanup: bool = Field(default=True, description="Run cleanup passes")
    min_land_patch_size: int = Field(
        default=4, ge=0, description="Land patches smaller than this become water"
    )
    max_water_hole_size: int = Field(
        default=3, ge=0, description="Water holes smaller than this become land"
    )
    smoothing_passes: int = Field(default=2, ge=0, description="Coastline smoothing passes")

    target_floor: int = Field(default=7, description="Z-level the terrain is placed on")


class DungeonConfig(BaseModel):
    """Dungeon layout parameters."""

    model_config = ConfigDict(frozen=True)

    target_floor: int = Field(default=7, description="Z-level the dungeon is placed on")
    wall_id: int = Field(default=1030, gt=0, description="Wall item id")
    floor_id: int = Field(default=406, gt=0, description="Floor ground item id")

    # Rooms
    room_count: int = Field(default=15, ge=0, description="Target number of rooms")
    min_room_size: int = Field(default=5, ge=1, description="Minimum room side")
    max_room_size: int = Field(default=12, ge=1, description="Maximum room side")

    # Corridors
    corridor_width: int = Field(default=2, ge=1, description="Corridor width in tiles")

    # Caves
    generate_caves: bool = Field(default=True, description="Overlay noise caves")
    cave_threshold: float = Field(
        default=0.4, ge=0, le=1, description="Noise above this is carved open"
    )

    # Layout
    connect_all_rooms: bool = Field(
        default=True, description="Extra sequential pass linking every room"
    )
    add_dead_ends: bool = Field(default=True, description="Grow cosmetic dead ends")
    use_smart_pathfinding: bool = Field(default=True, description="Route corridors with A*")
    add_intersections: bool = Field(default=True, description="Place corridor hubs")
    intersection_count: int = Field(default=5, ge=0, description="Target number of hubs")
    intersection_size: int = Field(default=2, ge=0, description="Hub half-size in tiles")

    @model_validator(mode="after")
    def _check_room_sizes(self) -> "DungeonConfig":
        if self.min_room_size > self.max_room_size:
            raise ValueError(
                f"min_room_size ({self.min_room_size}) exceeds "
                f"max_room_size ({self.max_room_size})"
            )
        return self


class GeneratorConfig(BaseModel):
    """Complete configuration file: one table per generation mode."""

    island: IslandConfig = Field(default_factory=IslandConfig)
    dungeon: DungeonConfig = Field(default_factory=DungeonConfig)


def configs_dir() -> Path:
    """Directory of the bundled presets, shipped inside the package."""
    return Path(__file__).parent / "configs"


def load_config(config_path: Path) -> GeneratorConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed GeneratorConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        pydantic.ValidationError: If a value is out of range.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return GeneratorConfig.model_validate(data)


def find_config(name: str) -> Path:
    """Resolve a preset name or a TOML path.

    A name with a directory part or a ``.toml`` suffix is a path and must
    exist as given. A bare name selects ``configs_dir() / "{name}.toml"``.

    Args:
        name: Preset name or path.

    Returns:
        Path to the config file.

    Raises:
        FileNotFoundError: If no such file or preset exists.
    """
    path = Path(name)
    if path.suffix == ".toml" or len(path.parts) > 1:
        if path.is_file():
            return path
        raise FileNotFoundError(f"Config file not found: {name}")

    preset = configs_dir() / f"{name}.toml"
    if preset.is_file():
        return preset

    raise FileNotFoundError(
        f"No preset named {name!r}; available presets: {', '.join(list_configs())}"
    )


def list_configs() -> list[str]:
    """Names of the bundled presets."""
    return sorted(p.stem for p in configs_dir().glob("*.toml"))
