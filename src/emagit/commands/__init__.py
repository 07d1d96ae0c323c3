"""Operation menus (dispatch, fetch, push, commit) and their actions."""
