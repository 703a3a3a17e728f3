# Screen settings
SCREEN_WIDTH = 800
SCREEN_HEIGHT = 600
FPS = 60
# Size of one grid cell on screen (pixels)
TILE_PIXELS = 32

# Simulation settings
# Fixed simulation step in seconds (50 ticks per second)
FIXED_DT = 0.02

# Tile codes used in world files
TILE_VOID = -1
TILE_FLOOR = 0
TILE_WALL = 1

# Avatar settings
# Movement speed in world units per second
AVATAR_SPEED = 2.5

# Wizard settings
# Movement speed in world units per second while following a path
WIZARD_SPEED = 2.0
# Distance the avatar must move before the wizard recalculates its path
RECALCULATE_DISTANCE = 1.0
# Delay after the session starts before the wizard taunts and begins the chase (seconds)
START_DELAY = 1.0
# Delay between starting the spell and the avatar's death (seconds)
CAST_DELAY = 1.7
# Window for the first random taunt after the opening one (seconds)
FIRST_TAUNT_WINDOW = (5.0, 10.0)
# Window between subsequent random taunts (seconds)
TAUNT_WINDOW = (3.0, 7.0)
# Sound clip names handed to the presentation layer
RUN_COWARD = "run_coward"
SPELL = "spell"
SCREAM = "scream"
TAUNTS = ("cackle", "you_cannot_hide", "i_smell_gold", "come_back")

# Collision settings
# If the wizard is this close to the avatar, the wizard casts (world units)
COLLISION_RADIUS = 0.5
# Distance within which treasure is picked up (world units)
PICKUP_RADIUS = 0.5
# Distance within which the avatar reaches the stairs (world units)
STAIRS_RADIUS = 0.5
# Delay between reaching the stairs and the wizard's forced stop (seconds)
STAIRS_DELAY = 1.5
# Delay between the forced stop and the wizard's final scream (seconds)
VICTORY_SCREAM_DELAY = 15.0

# World file: JSON definition of the level layout
WORLD_FILE = "worlds/default.json"
