# config.py

# 摄像头：会自动尝试这些索引
CAM_INDEX_CANDIDATES = [0, 1, 2]

# 摄像头后端：按顺序尝试，名称对应 cv2.CAP_<NAME>，None 表示默认后端
CAP_BACKENDS = ["DSHOW", "MSMF", None]

VIDEO_W, VIDEO_H = 640, 480
MIRROR = True                 # flipHorizontal: 网络摄像头画面镜像

SHOW_CAMERA = False           # True: 显示摄像头窗口（按 Q 关闭该窗口，不影响识别）

# Pose model (MediaPipe Pose)
MODEL_COMPLEXITY = 1          # 0 / 1 / 2，越大越准但越慢
MIN_DETECTION_CONFIDENCE = 0.5
MIN_TRACKING_CONFIDENCE = 0.5

# Single-pose thresholds
MIN_POSE_CONFIDENCE = 0.5
MIN_PART_CONFIDENCE = 0.1

# Gesture tracking
SELECTED_HAND = "right"       # left / right / both
X_OFFSET, Y_OFFSET = 0, 0     # 屏幕居中偏移
CLEAR_EVERY = 2               # 每触发 N 次动作后清空轨迹画布

# Output overlay
SHOW_SKELETON = True
SHOW_POINTS = True
SHOW_BOUNDING_BOX = False
MINI_SCALE = 0.25             # 小窗 160 x 120
WRIST_RADIUS = 10
LEFT_TRAIL_COLOR = (235, 235, 235)
RIGHT_TRAIL_COLOR = (255, 20, 147)   # DeepPink
KEYPOINT_COLOR = (0, 255, 255)
SKELETON_COLOR = (0, 255, 255)
BOX_COLOR = (255, 0, 0)

# Slicer game
WIN_W, WIN_H = VIDEO_W, VIDEO_H
GAME_FPS = 60
GRAVITY = 900.0               # px/s^2
TARGET_RADIUS = 26
SPAWN_INTERVAL_SEC = 1.1
MIN_SLICE_SPEED = 4.0         # 每帧拖动距离（像素）低于此值不算切
MAX_MISSES = 5
BLADE_TRAIL_LEN = 8
