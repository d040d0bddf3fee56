"""
Game constants for the snake game.
"""

# Size of one snake segment / food cell. Every coordinate is a multiple of it.
GRID_UNIT = 10

# Milliseconds between two ticks
GAME_SPEED = 80

# Board size used when the canvas does not say otherwise
DEFAULT_WIDTH = 300
DEFAULT_HEIGHT = 300

SCORE_PER_FOOD = 10

# Head collisions are only checked against segments from this index on
SELF_COLLISION_START_INDEX = 4

# Rejection-sampling attempts before food placement enumerates free cells
FOOD_PLACEMENT_ATTEMPTS = 100

# Colours
CANVAS_BORDER_COLOR = "black"
CANVAS_BACKGROUND_COLOR = "white"
SNAKE_COLOR = "lightgreen"
SNAKE_BORDER_COLOR = "darkgreen"
FOOD_COLOR = "red"
FOOD_BORDER_COLOR = "darkred"

# Keyboard key codes
LEFT_KEY = 37
UP_KEY = 38
RIGHT_KEY = 39
DOWN_KEY = 40

# Velocities (dx, dy) per tick. The y axis grows downwards, as on a canvas.
LEFT = (-GRID_UNIT, 0)
UP = (0, -GRID_UNIT)
RIGHT = (GRID_UNIT, 0)
DOWN = (0, GRID_UNIT)
VALID_MOVES = {LEFT, UP, RIGHT, DOWN}

KEY_DIRECTIONS = {
    LEFT_KEY: LEFT,
    UP_KEY: UP,
    RIGHT_KEY: RIGHT,
    DOWN_KEY: DOWN,
}

INITIAL_SNAKE = [
    (150, 150),
    (140, 150),
    (130, 150),
    (120, 150),
    (110, 150),
]
INITIAL_VELOCITY = RIGHT

# Death reasons
DEATH_WALL = "wall"
DEATH_SELF = "self"
DEATH_BOARD_FULL = "board_full"
