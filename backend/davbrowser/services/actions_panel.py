"""The built-in part of the actions panel: create-folder and upload forms."""

from davbrowser.adapters.tree import Node

_FORMS = """<form method="post" action="">
<h2>Create new folder</h2>
<input type="hidden" name="sabreAction" value="mkcol" />
Name:<br />
<input type="text" name="name" /><br />
<input type="submit" value="create" />
</form>
<form method="post" action="" enctype="multipart/form-data">
<h2>Upload file</h2>
<input type="hidden" name="sabreAction" value="put" />
Name (optional): <input type="text" name="name" /><br />
File: <input type="file" name="file" /><br />
<input type="submit" value="upload" />
</form>
"""


def tree_actions_panel(node: Node) -> str | None:
    """Offer the forms on writable collections only."""
    if not node.is_collection or not node.writable:
        return None
    return _FORMS
