from PIL import Image

from ibomscope.barcode import BarcodeScanner, Decoded, ScanResult

SQUARE = ((10, 20), (50, 20), (50, 60), (10, 60))


class FakeDecoder:
    def __init__(self, texts, fmt="QRCode"):
        self.texts = texts
        self.fmt = fmt
        self.calls = []

    def __call__(self, image, formats):
        self.calls.append((image.mode, formats))
        return [Decoded(text=t, format=self.fmt, position=SQUARE) for t in self.texts]


def frame():
    return Image.new("RGB", (64, 64), "white")


def test_without_decoder_scan_is_empty():
    scanner = BarcodeScanner()
    assert scanner.is_available() is False
    assert scanner.scan(frame()) == []


def test_default_formats():
    assert BarcodeScanner().enabled_formats() == {"QRCode", "Code128", "DataMatrix"}


def test_ean_only_formats():
    scanner = BarcodeScanner()
    scanner.set_formats_enabled(False, False, False, True)
    assert scanner.enabled_formats() == {"EAN13", "EAN8"}


def test_decoder_receives_grayscale_and_formats():
    dec = FakeDecoder(["X"])
    scanner = BarcodeScanner(dec)
    scanner.scan(frame())
    assert dec.calls == [("L", scanner.enabled_formats())]


def test_scan_builds_bounding_box():
    scanner = BarcodeScanner(FakeDecoder(["R1"]))
    [result] = scanner.scan(frame())
    assert result == ScanResult(text="R1", format="QRCode", bounding_box=(10, 20, 40, 40), confidence=1.0)


def test_empty_frame_not_decoded():
    dec = FakeDecoder(["R1"])
    assert BarcodeScanner(dec).scan(Image.new("L", (0, 0))) == []
    assert dec.calls == []


def test_barcode_detected_signal():
    scanner = BarcodeScanner(FakeDecoder(["A", "B"], fmt="Code128"))
    seen = []
    scanner.barcode_detected.connect(lambda t, f: seen.append((t, f)))
    scanner.scan(frame())
    assert seen == [("A", "Code128"), ("B", "Code128")]


def test_exact_match_preferred_over_partial():
    scanner = BarcodeScanner(FakeDecoder(["R12"]))
    matched = []
    scanner.component_matched.connect(matched.append)
    assert scanner.scan_for_component(frame(), ["R1", "R12"]) == "R12"
    assert matched == ["R12"]


def test_partial_match():
    scanner = BarcodeScanner(FakeDecoder(["PN:C7-REEL"]))
    assert scanner.scan_for_component(frame(), ["R1", "C7"]) == "C7"


def test_no_match_returns_none():
    scanner = BarcodeScanner(FakeDecoder(["ZZZ"]))
    assert scanner.scan_for_component(frame(), ["R1"]) is None