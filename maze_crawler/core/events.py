import struct
from typing import Iterator, Tuple
from maze_crawler.core.errors import MazeFormatError

# Event Types
EVT_START = 0x01
EVT_CARVE = 0x02
EVT_END = 0x03

MAGIC = b"MAZELOG"

class EventWriter:
    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "wb")

    def write_header(self, width: int, height: int):
        # Header: Magic "MAZELOG" + Width (1b) + Height (1b)
        self.file.write(MAGIC)
        self.file.write(struct.pack(">BB", width, height))

    def _log(self, type_code: int, x: int, y: int):
        # 1 byte type + 1 byte X + 1 byte Y, coordinates never exceed 255
        self.file.write(struct.pack(">BBB", type_code, x, y))

    def log_start(self, x: int, y: int):
        self._log(EVT_START, x, y)

    def log_carve(self, x: int, y: int):
        self._log(EVT_CARVE, x, y)

    def log_end(self, x: int, y: int):
        self._log(EVT_END, x, y)

    def close(self):
        if self.file:
            self.file.close()
            self.file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

class EventReader:
    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "rb")
        self.width = 0
        self.height = 0

    def read_header(self) -> Tuple[int, int]:
        magic = self.file.read(len(MAGIC))
        if magic != MAGIC:
            raise MazeFormatError("Invalid event log file")
        data = self.file.read(2)
        if len(data) != 2:
            raise MazeFormatError("Truncated event log header")
        self.width, self.height = struct.unpack(">BB", data)
        return self.width, self.height

    def stream_events(self) -> Iterator[Tuple[int, Tuple[int, int]]]:
        while True:
            data = self.file.read(3)
            if len(data) < 3:
                # Trailing partial record means the writer died mid-write
                break
            type_code, x, y = struct.unpack(">BBB", data)
            if type_code in (EVT_START, EVT_CARVE, EVT_END):
                yield (type_code, (x, y))

    def close(self):
        if self.file:
            self.file.close()
            self.file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
