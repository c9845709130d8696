"""EGM96 15 arc-minute offset grid geometry."""

EGM96_INTERVAL_DEG: float = 15.0 / 60.0
EGM96_NUM_ROWS: int = 721
EGM96_NUM_COLS: int = 1440
EGM96_NUM_SAMPLES: int = EGM96_NUM_ROWS * EGM96_NUM_COLS

# INTEGER*2 records as written by NGA (WW15MGH.DAC), big-endian.
EGM96_SAMPLE_BYTES: int = 2
EGM96_FILE_SIZE_BYTES: int = EGM96_NUM_SAMPLES * EGM96_SAMPLE_BYTES
EGM96_DEFAULT_BYTE_ORDER: str = "big"

CM_PER_M: float = 100.0

BYTE_ORDER_DTYPES = {
    "big": ">i2",
    "little": "<i2",
}
