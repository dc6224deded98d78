from dataclasses import dataclass

@dataclass
class GameConfig:
    screen_width: int = 1200
    screen_height: int = 800
    grid_width: int = 50
    grid_height: int = 30
    cell_size: int = 18
    info_panel_width: int = 300
    log_panel_height: int = 140
    fps: int = 30
    map_generation_type: str = 'simple_room'
    log_capacity: int = 50
    player_start: tuple = (10, 15)
    player_health: int = 100
    spawn_attempts: int = 100
    orc_aggro_radius: float = 5.0
    min_damage: int = 5
    max_damage: int = 20
    merchant_move_chance: float = 0.24
    merchant_drop_chance: float = 0.15
    survival_target_turns: int = 50
