import struct
import zipfile

import pytest

from app_regex.log import set_verbose


@pytest.fixture(autouse=True)
def quiet_log():
    set_verbose(False)
    yield
    set_verbose(False)


def _utf8(text):
    data = text.encode('utf-8')
    return struct.pack('>BH', 1, len(data)) + data


def build_class_file(internal_name, with_long_constant=False):
    """
    Build a minimal compiled class declaring ``internal_name``.

    With ``with_long_constant`` a CONSTANT_Long (two pool slots) precedes the
    class entries, shifting every index after it by two.
    """
    pool = []
    index = 1
    if with_long_constant:
        pool.append(struct.pack('>Bq', 5, 42))
        index += 2
    this_class = index
    pool.append(struct.pack('>BH', 7, index + 1))
    pool.append(_utf8(internal_name))
    super_class = index + 2
    pool.append(struct.pack('>BH', 7, index + 3))
    pool.append(_utf8('java/lang/Object'))
    count = index + 4

    header = struct.pack('>IHHH', 0xCAFEBABE, 0, 52, count)
    body = struct.pack('>HHHHHHH', 0x0021, this_class, super_class, 0, 0, 0, 0)
    return header + b''.join(pool) + body


def write_zip(path, entries, compression=zipfile.ZIP_STORED):
    with zipfile.ZipFile(path, 'w', compression=compression) as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return path


def corrupt_zip_entry(path, entry_name):
    """Flip every byte of the stored payload of one entry in a ZIP on disk"""
    with zipfile.ZipFile(path, 'r') as zf:
        info = zf.getinfo(entry_name)
    data = bytearray(path.read_bytes())
    name_len, extra_len = struct.unpack('<HH', data[info.header_offset + 26:info.header_offset + 30])
    start = info.header_offset + 30 + name_len + extra_len
    for i in range(start, start + info.compress_size):
        data[i] ^= 0xFF
    path.write_bytes(bytes(data))
    return path


@pytest.fixture
def make_jar(tmp_path):
    """Factory writing a JAR that holds empty entries with the given names"""
    def _make(name, entry_names):
        return str(write_zip(tmp_path / name, {entry: b'' for entry in entry_names}))
    return _make


@pytest.fixture
def example_jar(make_jar):
    return make_jar('example.jar', [
        'META-INF/MANIFEST.MF',
        'com/foo/',
        'com/foo/A.class',
        'com/foo/B.class',
        'com/bar/C.class',
        'Top.class',
    ])


@pytest.fixture
def make_aar(tmp_path):
    """Factory writing an AAR whose embedded JARs hold the given class entries"""
    def _make(name, jars):
        entries = {'AndroidManifest.xml': b'<manifest/>', 'R.txt': b''}
        for jar_name, class_entries in jars.items():
            jar_path = write_zip(tmp_path / ('embedded-' + jar_name.replace('/', '_')),
                                 {entry: b'' for entry in class_entries})
            entries[jar_name] = jar_path.read_bytes()
        return str(write_zip(tmp_path / name, entries))
    return _make


@pytest.fixture
def make_class(tmp_path):
    def _make(file_name, internal_name, **kwargs):
        path = tmp_path / file_name
        path.write_bytes(build_class_file(internal_name, **kwargs))
        return str(path)
    return _make


class FakeDexUnit:
    def __init__(self, name, descriptors):
        self.name = name
        self.descriptors = descriptors

    def class_descriptors(self):
        return iter(self.descriptors)


@pytest.fixture
def fake_dex_loader():
    """Factory for loaders that ignore the bytes and return fixed dex units"""
    def _make(*units):
        seen = []

        def loader(data):
            seen.append(data)
            return [FakeDexUnit(f"classes{i or ''}.dex", descriptors)
                    for i, descriptors in enumerate(units)]
        loader.seen = seen
        return loader
    return _make


@pytest.fixture
def corrupt_aar(tmp_path):
    """AAR whose deflated classes.jar payload is damaged"""
    jar = write_zip(tmp_path / 'inner.jar', {'com/lib/A.class': b'\xca\xfe' * 64})
    path = write_zip(tmp_path / 'corrupt.aar',
                     {'AndroidManifest.xml': b'<manifest/>', 'classes.jar': jar.read_bytes()},
                     compression=zipfile.ZIP_DEFLATED)
    return str(corrupt_zip_entry(path, 'classes.jar'))


@pytest.fixture
def corrupt_apk(tmp_path):
    """APK whose deflated classes.dex payload is damaged"""
    path = write_zip(tmp_path / 'corrupt.apk',
                     {'AndroidManifest.xml': b'', 'classes.dex': b'dex\n035\x00' + b'\x00' * 256},
                     compression=zipfile.ZIP_DEFLATED)
    return str(corrupt_zip_entry(path, 'classes.dex'))
