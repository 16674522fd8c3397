from narr.versioninfo import render_versioninfo, main


def test_render_substitutes_versions():
    out = render_versioninfo("1.2.3")
    assert "FILEVERSION     1,2,3,0" in out
    assert 'VALUE "FileVersion", "1.2.3"' in out
    assert 'VALUE "ProductVersion", "1.2.3"' in out


def test_render_leaves_no_placeholders():
    out = render_versioninfo("4.5")
    assert "{VERSION" not in out
    assert out.endswith('1 ICON "icon.ico"\n')


def test_main_writes_file(tmp_path):
    target = tmp_path / "out.rc"
    assert main(["-version", "2.0.1", "-outfile", str(target)]) == 0
    assert target.read_text(encoding="utf-8") == render_versioninfo("2.0.1")


def test_main_default_version(tmp_path):
    target = tmp_path / "default.rc"
    main(["--outfile", str(target)])
    assert target.read_text(encoding="utf-8") == render_versioninfo("0.0.0")