# =========================
# HAND LANDMARKS
# =========================
NUM_LANDMARKS = 21
HAND_SIDES = ("Left", "Right")

# (MCP, PIP, TIP) landmark indices per finger
FINGERS = {
    "THUMB":  (1, 2, 4),
    "INDEX":  (5, 6, 8),
    "MIDDLE": (9, 10, 12),
    "RING":   (13, 14, 16),
    "PINKY":  (17, 18, 20),
}

# Skeleton edges used to draw a detected hand
HAND_CONNECTIONS = (
    (0, 1), (1, 2), (2, 3), (3, 4),
    (0, 5), (5, 6), (6, 7), (7, 8),
    (5, 9), (9, 10), (10, 11), (11, 12),
    (9, 13), (13, 14), (14, 15), (15, 16),
    (13, 17), (17, 18), (18, 19), (19, 20),
    (0, 17),
)

# =========================
# RECOGNITION
# =========================
CONFIRM_FRAMES = 30       # run length to exceed before a count is confirmed
RESET_LABEL = "10"        # confirmed label that restarts the game
AI_MOVE_DELAY = 1.0       # seconds before the AI answers a human move

# =========================
# DATASET
# =========================
CSV_PATH = "hand_features.csv"
MODEL_PATH = "models/hand_count_rf.pkl"
LABEL_COLUMN = "label"
