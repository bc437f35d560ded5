"""Court dimensions and gameplay constants.

All values are in screen pixels and frames (one frame = one physics tick at 60 Hz).
Velocities are pixels per frame, accelerations pixels per frame squared.
"""

# Screen / court
SCREEN_WIDTH = 1024
SCREEN_HEIGHT = 768
GROUND_LEVEL = SCREEN_HEIGHT - 50  # y of the court floor (y grows downward)

# Net post, centred on the court and standing on the floor
NET_X = SCREEN_WIDTH / 2
NET_HEIGHT = 140.0
NET_WIDTH = 10.0

# Bodies
PLAYER_RADIUS = 50.0
BALL_RADIUS = 35.0

# Player movement
PLAYER_GRAVITY = 0.8
PLAYER_MOVE_SPEED = 4.0
PLAYER_JUMP_FORCE = -12.0
PLAYER_MAX_VELOCITY_Y = 15.0  # max downward speed

# Ball
BALL_GRAVITY = 0.4
BALL_BOUNCE_DAMPING = 1.0  # 1.0 = no energy lost on wall/ceiling/ground
BALL_MAX_SPEED = 15.0
BALL_SERVE_HEIGHT = 100.0
TRAIL_LENGTH = 3
TRAIL_SAMPLE_INTERVAL = 2  # frames between trail samples
SPIN_FACTOR = 35.0  # degrees of rotation per (|vx| / radius)

# Net hit
NET_VERTICAL_DAMPING = 0.9

# Ball-player hit
HIT_RETENTION = 0.95  # energy kept after reflecting off a blob
HIT_TRANSFER_X = 0.7  # share of the blob's vx handed to the ball
HIT_TRANSFER_Y = 0.5  # share of the blob's vy handed to the ball
SPIKE_VELOCITY = -5.0  # blob vy below this counts as an active jump
SPIKE_BOOST = 3.0  # extra upward speed on a jumping hit

# Match rules
WIN_SCORE = 10
SCORE_DELAY_FRAMES = 120  # 2 s grace period after a point

# AI
AI_REACTION_DISTANCE = 150.0
AI_JUMP_THRESHOLD = 60.0  # how far the ball may sit below the blob centre
AI_UPPER_REACH = 100.0  # how far the ball may sit above the blob centre
AI_POSITION_TOLERANCE = 20.0
AI_JUMP_COOLDOWN = 30
AI_STEER_FACTOR = 0.8
AI_DRIFT_FACTOR = 0.6
AI_JUMP_SCALE = 0.9
AI_MISS_THRESHOLD = 20  # randint(0, 100) must exceed this for the AI to jump

# Particles
MAX_PARTICLES = 100
IMPACT_PARTICLES = 15
PARTICLE_GRAVITY = 0.3
PARTICLE_LIFE_DECAY = 0.02
PARTICLE_GROUND_MARGIN = 20.0
PARTICLE_MIN_ANGLE = 60  # degrees above the ground
PARTICLE_MAX_ANGLE = 120
PARTICLE_MIN_SPEED = 2
PARTICLE_MAX_SPEED = 6

# Credits screen
CREDITS_SCROLL_SPEED = 2.0
CREDITS_SCROLL_FLOOR = -800.0

# Colors (RGB)
PLAYER1_COLOR = (0, 121, 241)  # blue
PLAYER2_COLOR = (230, 41, 55)  # red
GROUND_COLOR = (76, 63, 47)  # dark brown, also used for impact particles
