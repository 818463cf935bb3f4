from medialib.media import MediaClassifier, parse_extensions

classifier = MediaClassifier.from_strings(".mp4,.mkv,.flv", "jpg,.png,.heic")


def test_parse_extensions_normalizes():
    assert parse_extensions(" .MP4, mkv,,webm ") == {".mp4", ".mkv", ".webm"}
    assert parse_extensions(["JPG", ".png"]) == {".jpg", ".png"}


def test_video_is_case_insensitive():
    c = classifier.classify("Movie.MP4")
    assert c.kind == "video"
    assert c.mime_type == "video/mp4"
    assert classifier.classify("x.mkv").mime_type == "video/x-matroska"


def test_allow_listed_video_without_table_entry_gets_default_mime():
    assert classifier.classify("clip.flv").mime_type == "video/mp4"


def test_video_not_on_allow_list_is_not_video():
    assert classifier.classify("clip.webm").kind != "video"
    assert not classifier.is_video("clip.webm")


def test_image_without_known_mime_has_none():
    c = classifier.classify("photo.heic")
    assert c.kind == "image"
    assert c.mime_type is None
    assert classifier.classify("photo.PNG").mime_type == "image/png"


def test_other_buckets():
    assert classifier.classify("a.pdf").kind == "document"
    assert classifier.classify("a.mp3").kind == "audio"
    assert classifier.classify("a.zip").kind == "archive"
    assert classifier.classify("a.py").kind == "code"


def test_unknown_degrades_to_file():
    assert classifier.classify("README").kind == "file"
    assert classifier.classify("x.weird").mime_type is None
