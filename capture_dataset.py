"""
Captura de dataset: muestra la cámara, detecta la mano y guarda una fila
de features por frame con la etiqueta activa.

Teclas:
  1..9  → etiqueta "1".."9"
  0     → etiqueta "10"
  SPACE → grabar / pausar
  ESC   → salir
"""
import cv2

from app.config import AppConfig
from core.camera import Camera
from core.hand_tracker import HandTracker
from hand_logger import HandLogger
from utils.constants import CSV_PATH

config = AppConfig.from_env()

# ========================
# Componentes
# ========================
camera = Camera(config.camera_device, config.fps_limit)
tracker = HandTracker(
    config.landmarker_path,
    max_num_hands=config.max_num_hands,
    min_detection_confidence=config.min_detection_confidence,
)
csv_logger = HandLogger(CSV_PATH)

frame_id = 0
label = "1"
recording = False

try:
    for frame in camera.frames():
        frame_id += 1
        hands_data = tracker.process(frame)

        if recording and hands_data:
            csv_logger.log(frame_id, label, hands_data)

        # ========================
        # UI (flip visual)
        # ========================
        frame = cv2.flip(frame, 1)
        color = (0, 0, 255) if recording else (0, 255, 0)
        cv2.putText(frame, f"LABEL: {label}", (20, 40),
                    cv2.FONT_HERSHEY_SIMPLEX, 1, color, 2)
        cv2.putText(frame, f"{'REC' if recording else 'PAUSED'}  rows={csv_logger.rows}",
                    (20, 80), cv2.FONT_HERSHEY_SIMPLEX, 0.7, color, 2)
        cv2.imshow("Dataset capture", frame)

        key = cv2.waitKey(1) & 0xFF
        if ord('1') <= key <= ord('9'):
            label = chr(key)
        elif key == ord('0'):
            label = "10"
        elif key == ord(' '):
            recording = not recording
        elif key == 27:
            break
finally:
    # ========================
    # Cleanup
    # ========================
    camera.release()
    tracker.release()
    csv_logger.close()
    cv2.destroyAllWindows()
    print(f"✓ {csv_logger.rows} filas guardadas en {CSV_PATH}")
