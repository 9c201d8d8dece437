from PyQt5.QtWidgets import QWidget, QApplication, QMenu, QAction
from PyQt5.QtCore import Qt, QTimer, QPointF, QRectF
from PyQt5.QtGui import QPainter, QFont, QColor
import math

from config import Config, RabbitState
from loggers import SystemLogger


class GardenWidget(QWidget):
    """
    Draws a GardenSession and feeds player input back into it.

    The widget only listens to session events; nothing in the simulation
    knows it exists.
    """

    def __init__(self, session):
        super().__init__()
        self.session = session
        self.bubbles = []
        self.dance_phase = 0.0
        self.init_ui()

        session.events.add_listener("rabbit:mood", self.show_mood)
        session.events.add_listener("session:*", lambda event: self.update())
        session.events.add_listener("food:*", lambda event: self.update())

        # Frame driver and autosave, both no-ops unless the session is running
        self.frame_timer = QTimer(self)
        self.frame_timer.timeout.connect(self.update_garden)
        self.frame_timer.start(int(Config.FRAME_INTERVAL))

        self.save_timer = QTimer(self)
        self.save_timer.timeout.connect(self.session.autosave)
        self.save_timer.start(Config.SAVE_INTERVAL)

    def init_ui(self):
        self.setWindowTitle(f"Bunny Garden v{Config.VERSION}")
        width, height = self.session.scene_size
        self.resize(int(width), int(height))
        self.setMouseTracking(True)

    def update_garden(self):
        if self.session.frame() is not None:
            if self.session.rabbit.state == RabbitState.DANCING:
                self.dance_phase += 0.3
            self.update()

    # Renderer hooks

    def show_mood(self, event):
        if not self.isVisible():
            SystemLogger.warning(f"Garden window not visible, dropping '{event.data['mood']}' bubble")
            return
        bubble = {"emoji": event.data["emoji"], "anchor": event.data["anchor"]}
        self.bubbles.append(bubble)
        QTimer.singleShot(event.data["lifetime_ms"], lambda: self.remove_bubble(bubble))
        self.update()

    def remove_bubble(self, bubble):
        if bubble in self.bubbles:
            self.bubbles.remove(bubble)
            self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillRect(self.rect(), QColor(198, 235, 190))

        for food in self.session.foods:
            self.draw_emoji(painter, Config.FOOD_EMOJIS[food.type.value], food.x, food.y, 22)

        self.draw_rabbit(painter)

        for bubble in self.bubbles:
            x, y = bubble["anchor"]
            self.draw_emoji(painter, bubble["emoji"], x, y, 20)

        self.draw_status(painter)

    def draw_rabbit(self, painter):
        rabbit = self.session.rabbit
        size = 13 * rabbit.pixel_size
        offset = 0.0
        if rabbit.state == RabbitState.DANCING:
            offset = -abs(math.sin(self.dance_phase)) * 10

        painter.save()
        painter.translate(rabbit.x, rabbit.y + offset)
        if rabbit.facing_left:
            painter.scale(-1, 1)
        self.draw_emoji(painter, "🐇", 0, 0, size * rabbit.scale)
        painter.restore()

        if rabbit.state == RabbitState.EATING:
            self.draw_emoji(painter, "✨", rabbit.x + size / 2, rabbit.y - size / 2, 14)

    def draw_emoji(self, painter, text, x, y, size):
        painter.setFont(QFont('Arial', max(1, int(size))))
        half = size
        painter.drawText(QRectF(x - half, y - half, half * 2, half * 2), Qt.AlignCenter, text)

    def draw_status(self, painter):
        status = self.session.status()
        painter.setFont(QFont('Arial', 11))
        painter.setPen(QColor(40, 60, 40))
        lines = [
            f"{status['stage']} - {status['state']}",
            f"Hunger: {int(status['hunger'])}% ({status['hunger_descriptor']})",
            f"Age: {int(status['age'])}s",
        ]
        if status['activity'] != 'running':
            lines.append(f"[{status['activity']}] right-click for menu")
        if status['pending_food']:
            lines.append(f"Click to place {Config.FOOD_DISPLAY_NAMES[status['pending_food']]}")
        for i, line in enumerate(lines):
            painter.drawText(QPointF(10, 20 + i * 16), line)

    # Input

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.session.click(event.x(), event.y())
            self.update()
            event.accept()
        elif event.button() == Qt.RightButton:
            self.show_context_menu(event.globalPos())

    def show_context_menu(self, position):
        menu = QMenu()

        if self.session.is_running():
            pause_action = QAction('Pause', self)
            pause_action.triggered.connect(self.session.pause)
            menu.addAction(pause_action)
        else:
            start_action = QAction('Start', self)
            start_action.triggered.connect(self.session.start)
            menu.addAction(start_action)

        reset_action = QAction('Reset', self)
        reset_action.triggered.connect(self.session.reset)
        menu.addAction(reset_action)

        menu.addSeparator()
        for food_name, display_name in Config.FOOD_DISPLAY_NAMES.items():
            feed_action = QAction(f"{Config.FOOD_EMOJIS[food_name]} {display_name}", self)
            feed_action.triggered.connect(lambda checked=False, name=food_name: self.session.arm_placement(name))
            menu.addAction(feed_action)
        if self.session.state.pending_food is not None:
            cancel_action = QAction('Cancel placement', self)
            cancel_action.triggered.connect(self.session.cancel_placement)
            menu.addAction(cancel_action)

        menu.addSeparator()
        quit_action = QAction('Quit', self)
        quit_action.triggered.connect(QApplication.instance().quit)
        menu.addAction(quit_action)

        menu.exec_(position)

    def resizeEvent(self, event):
        self.session.set_scene_size(self.width(), self.height())
        super().resizeEvent(event)

    def closeEvent(self, event):
        self.frame_timer.stop()
        self.save_timer.stop()
        self.session.shutdown()
        super().closeEvent(event)
