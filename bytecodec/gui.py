"""
Desktop window for compressing and decompressing single files
"""
import os
import sys

from PyQt6.QtCore import QSize, Qt
from PyQt6.QtWidgets import (
    QApplication,
    QComboBox,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from .file_type import detect_type, suggest_algorithm
from .transfer import (
    AUTO,
    algorithm_from_path,
    compress_file,
    decompress_file,
    output_path_for,
    restored_path_for,
)

ALGORITHMS = {
    "Auto": AUTO,
    "RLE": "rle",
    "LZ77": "lz77",
}

BUTTON_STYLE = """
    font-size: 15px;
    color: white;
    font-weight: 500;
    background-color: {color};
    border-radius: 10px;
"""

LABEL_STYLE = """
    font-size: {size}px;
    color: black;
    font-weight: {weight};
"""


class MainWindow(QMainWindow):
    """
    class controls main window
    """

    def __init__(self):
        super().__init__()
        self.setFixedSize(QSize(800, 600))
        self.setWindowTitle("Byte Compressor")

        self.central_widget = QWidget()
        self.layout = QVBoxLayout()
        self.layout.setContentsMargins(40, 30, 40, 30)
        self.central_widget.setStyleSheet("background-color: #E8EEF2;")

        self.name = QLabel("Byte compressor")
        self.name.setAlignment(Qt.AlignmentFlag.AlignLeft)
        self.name.setStyleSheet(
            """
            font-size: 35px;
            color: #0E103D;
            font-weight: 700;
        """
        )
        self.layout.addWidget(self.name)

        self.caption = QLabel("Choose a file:")
        self.caption.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.caption.setStyleSheet(LABEL_STYLE.format(size=25, weight=600))
        self.layout.addWidget(self.caption)

        self.pick_button = self._button("Pick a file", "#0E103D", QSize(400, 60))
        self.pick_button.clicked.connect(self.pick_file)

        self.selected_file = None
        self.file_label = QLabel("No file selected")
        self.file_label.setStyleSheet(LABEL_STYLE.format(size=15, weight=500))
        self.file_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.layout.addWidget(self.file_label)

        self.choose_alg = QLabel("Choose algorithm:")
        self.choose_alg.setStyleSheet(LABEL_STYLE.format(size=20, weight=600))
        self.layout.addWidget(self.choose_alg)

        self.algorithms_box = QComboBox()
        self.algorithms_box.addItems(list(ALGORITHMS))
        self.algorithms_box.setStyleSheet(
            """
            QComboBox {
                background-color: white;
                padding: 5px 10px;
                font-size: 15px;
                color: black;
                font-weight: 400;
                border-radius: 10px;
            }
        """
        )
        self.algorithms_box.setFixedSize(QSize(720, 40))
        self.layout.addWidget(self.algorithms_box)

        self.result_label = QLabel("")
        self.result_label.setStyleSheet(LABEL_STYLE.format(size=15, weight=500))
        self.result_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.layout.addWidget(self.result_label)

        self.compress_button = self._button("Compress", "#0E103D", QSize(200, 60))
        self.compress_button.clicked.connect(self.compress_file)

        self.decompress_button = self._button("Decompress", "#3590F3", QSize(200, 60))
        self.decompress_button.clicked.connect(self.decompress_file)

        self.central_widget.setLayout(self.layout)
        self.setCentralWidget(self.central_widget)

    def _button(self, text: str, color: str, size: QSize) -> QPushButton:
        button = QPushButton(text)
        button.setStyleSheet(BUTTON_STYLE.format(color=color))
        button.setFixedSize(size)
        row = QHBoxLayout()
        row.addStretch()
        row.addWidget(button)
        row.addStretch()
        self.layout.addLayout(row)
        return button

    def pick_file(self):
        """
        function handles picking files
        """
        dialog = QFileDialog()
        dialog.setFileMode(QFileDialog.FileMode.ExistingFile)
        if not dialog.exec():
            return

        self.selected_file = dialog.selectedFiles()[0]
        try:
            mime_type = detect_type(self.selected_file)
        except OSError as e:
            QMessageBox.warning(self, "Error", str(e))
            self.selected_file = None
            return

        size_kb = round(os.stat(self.selected_file).st_size / 1024, 2)
        self.file_label.setText(
            f"Selected: {os.path.basename(self.selected_file)} ({size_kb} KB, {mime_type}, "
            f"suggested {suggest_algorithm(mime_type).upper()})"
        )
        self.result_label.setText("")

    def compress_file(self):
        """
        function handles file compression
        """
        if not self.selected_file:
            QMessageBox.warning(self, "Error", "No file to compress, select it first")
            return

        algorithm = ALGORITHMS[self.algorithms_box.currentText()]
        try:
            if algorithm == AUTO:
                algorithm = suggest_algorithm(detect_type(self.selected_file))
            output = output_path_for(self.selected_file, algorithm)
            stats = compress_file(self.selected_file, output, algorithm)
        except (ValueError, OSError) as e:
            QMessageBox.warning(self, "Compression failed", str(e))
            return

        self.result_label.setText(
            f"Original size was: {round(stats.original_size / 1024, 2)} KB, "
            f"now size is: {round(stats.compressed_size / 1024, 2)} KB"
        )
        QMessageBox.information(
            self, "Success", f"File was compressed using {algorithm.upper()} into {output}"
        )

    def decompress_file(self):
        """
        function handles file decompression
        """
        if not self.selected_file:
            QMessageBox.warning(self, "Error", "No file to decompress, select it first")
            return

        algorithm = ALGORITHMS[self.algorithms_box.currentText()]
        if algorithm == AUTO:
            algorithm = algorithm_from_path(self.selected_file)
            if algorithm is None:
                QMessageBox.warning(
                    self, "Error", "Pick RLE or LZ77, the file extension does not tell"
                )
                return

        output = restored_path_for(self.selected_file)
        try:
            stats = decompress_file(self.selected_file, output, algorithm)
        except (ValueError, OSError) as e:
            QMessageBox.warning(self, "Decompression failed", str(e))
            return

        self.result_label.setText(
            f"Restored {round(stats.decompressed_size / 1024, 2)} KB into {output}"
        )
        QMessageBox.information(self, "Success", "File was decompressed!")


def run() -> int:
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(run())
