# pose/worker.py
import time
import threading
from typing import Optional

import cv2

from config import MIRROR, SHOW_CAMERA, MODEL_COMPLEXITY
from pose.types import PoseState
from pose.camera import try_open_camera
from pose.source import MediaPipePoseSource

PREVIEW_WINDOW = "Camera (press Q to close this window)"
MODEL_COMPLEXITIES = (0, 1, 2)


class PoseWorker(threading.Thread):
    """
    摄像头 + 姿态识别线程：只负责把最新的 Pose 发布到 PoseState，
    手势计算与事件分发都在主线程里做
    """

    def __init__(self, state: PoseState, model_complexity: int = MODEL_COMPLEXITY):
        super().__init__(daemon=True)
        self.state = state
        self._stop = threading.Event()
        self.lock = threading.Lock()

        self.model_complexity = model_complexity
        self._pending_complexity: Optional[int] = None

        self.show_camera = SHOW_CAMERA

    def stop(self):
        self._stop.set()

    def request_model_complexity(self, complexity: int):
        """下一帧之前切换模型（0/1/2）"""
        if complexity not in MODEL_COMPLEXITIES:
            raise ValueError(f"model complexity must be one of {MODEL_COMPLEXITIES}, got {complexity!r}")
        with self.lock:
            self._pending_complexity = complexity

    def _set_label(self, label: str):
        with self.lock:
            self.state.label = label

    def _load_source(self, complexity: int) -> MediaPipePoseSource:
        self._set_label("LOADING_MODEL")
        source = MediaPipePoseSource(model_complexity=complexity, flip_horizontal=MIRROR)
        self.model_complexity = complexity
        with self.lock:
            self.state.model_complexity = complexity
        print("[PoseWorker] Model loaded, complexity:", complexity)
        return source

    def _swap_source(self, source: MediaPipePoseSource, complexity: int) -> MediaPipePoseSource:
        """先加载新模型，成功后再释放旧的；失败则继续用旧模型"""
        try:
            new_source = self._load_source(complexity)
        except Exception as e:
            print(f"[PoseWorker] Model load failed (complexity {complexity}), keep {self.model_complexity}:", e)
            with self.lock:
                self.state.model_complexity = self.model_complexity
            return source
        source.close()
        return new_source

    def run(self):
        cap = None
        source = None
        try:
            source = self._load_source(self.model_complexity)

            self._set_label("LOADING_VIDEO")
            cap, cam_info = try_open_camera()
            with self.lock:
                self.state.cam_info = cam_info

            if cap is None:
                self._set_label("CAMERA_OPEN_FAILED")
                print("[PoseWorker] CAMERA_OPEN_FAILED. This device has no camera or it is used by another app.")
                return

            print("[PoseWorker] Opened:", cam_info)

            drawer = source.mp.solutions.drawing_utils
            connections = source.mp.solutions.pose.POSE_CONNECTIONS
            fps = 0.0
            last_t = time.time()

            while not self._stop.is_set():
                with self.lock:
                    pending = self._pending_complexity
                    self._pending_complexity = None
                if pending is not None and pending != self.model_complexity:
                    source = self._swap_source(source, pending)

                ok, frame = cap.read()
                if not ok:
                    self._set_label("CAMERA_READ_FAILED")
                    time.sleep(0.01)
                    continue

                pose = source.estimate(frame)

                now = time.time()
                dt = now - last_t
                last_t = now
                if dt > 0:
                    fps = 0.9 * fps + 0.1 * (1.0 / dt)

                label = "POSE" if pose is not None else "NO_POSE"

                if self.show_camera:
                    if source.last_result is not None and source.last_result.pose_landmarks:
                        drawer.draw_landmarks(frame, source.last_result.pose_landmarks, connections)
                    if MIRROR:
                        frame = cv2.flip(frame, 1)
                    cv2.putText(frame, f"{cam_info}", (10, 24), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (0, 255, 0), 2)
                    cv2.putText(frame, label, (10, 52), cv2.FONT_HERSHEY_SIMPLEX, 0.9, (0, 255, 0), 2)
                    cv2.imshow(PREVIEW_WINDOW, frame)
                    k = cv2.waitKey(1) & 0xFF
                    if k in (ord('q'), ord('Q')):
                        cv2.destroyWindow(PREVIEW_WINDOW)
                        self.show_camera = False

                with self.lock:
                    self.state.pose = pose
                    self.state.frame_id += 1
                    self.state.label = label
                    self.state.fps = fps

        except Exception as e:
            import traceback
            self._set_label("WORKER_EXCEPTION")
            print("[PoseWorker] Exception:", e)
            traceback.print_exc()

        finally:
            if cap is not None:
                cap.release()
            if source is not None:
                source.close()
            if self.show_camera:
                cv2.destroyAllWindows()
