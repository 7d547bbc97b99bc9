import pytest

from nisplat._utils.docs import docdict, fill_doc


def test_fill_doc():
    @fill_doc
    def splat(grid_side):
        """Splat.

        Parameters
        ----------
        %(grid_side)s
        """

    assert "grid_side : :obj:`int`, default=320" in splat.__doc__
    # entries are indented like the docstring they are inserted in
    assert "\n            Number of voxels" in splat.__doc__


def test_fill_doc_without_docstring():
    def undocumented():
        pass

    assert fill_doc(undocumented) is undocumented


def test_fill_doc_unknown_entry():
    def f():
        """Do nothing.

        %(not_an_entry)s
        """

    with pytest.raises(RuntimeError, match="Error documenting f"):
        fill_doc(f)


def test_verbose_entries():
    assert "default=1" in docdict["verbose"]
    assert "default=0" in docdict["verbose0"]
