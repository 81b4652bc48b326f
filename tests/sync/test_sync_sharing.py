import unittest
from unittest.mock import Mock

from dbxsync.errors import ApiError, SharingResolutionError
from dbxsync.models import Page, SharedMember, SharingInfo
from dbxsync.sync.sharing import SharingResolver


class TestSharingResolver(unittest.TestCase):
    def test_container_keeps_source_order_across_pages(self) -> None:
        source = Mock()
        source.list_container_members.side_effect = [
            Page(
                items=[SharedMember.user("u1"), SharedMember.group("g1")],
                cursor="c1",
            ),
            Page(items=[SharedMember.user("u2")]),
        ]

        info = SharingResolver(source).resolve_container("sf:1")

        self.assertEqual(info, SharingInfo(user_ids=("u1", "u2"), group_names=("g1",)))
        source.list_container_members.assert_any_call("sf:1", None)
        source.list_container_members.assert_any_call("sf:1", "c1")

    def test_container_with_no_members(self) -> None:
        source = Mock()
        source.list_container_members.return_value = Page(items=[])
        self.assertEqual(SharingResolver(source).resolve_container("sf:1"), SharingInfo())

    def test_container_failure_on_later_page(self) -> None:
        source = Mock()
        source.list_container_members.side_effect = [
            Page(items=[SharedMember.user("u1")], cursor="c1"),
            ApiError("boom"),
        ]
        with self.assertRaises(SharingResolutionError) as ctx:
            SharingResolver(source).resolve_container("sf:1")
        self.assertIsInstance(ctx.exception.cause, ApiError)
        self.assertEqual(ctx.exception.details["shared_folder_id"], "sf:1")

    def test_file_members(self) -> None:
        source = Mock()
        source.list_file_members.return_value = Page(
            items=[SharedMember.group("eng"), SharedMember.user("u1")]
        )

        info = SharingResolver(source).resolve_file("/projects/a.txt")

        self.assertEqual(info.user_ids, ("u1",))
        self.assertEqual(info.group_names, ("eng",))
        source.list_file_members.assert_called_once_with("/projects/a.txt", None)

    def test_file_failure(self) -> None:
        source = Mock()
        source.list_file_members.side_effect = ApiError("boom")
        with self.assertRaises(SharingResolutionError):
            SharingResolver(source).resolve_file("/a.txt")


if __name__ == "__main__":
    unittest.main()
