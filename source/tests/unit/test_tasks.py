#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import pytest

import tasks
import tasks.clean
import tasks.tests


def test_collections_are_registered() -> None:
    assert set(tasks.ns.collections) == {"cdk", "clean", "tests"}


@pytest.mark.parametrize("collection", ["clean", "tests"])
def test_all_is_the_default_task(collection: str) -> None:
    namespace = tasks.ns.collections[collection]
    assert namespace.default == "all"
    assert "all" in namespace.tasks


def test_task_modules_keep_builtin_all() -> None:
    assert not hasattr(tasks.clean, "all")
    assert not hasattr(tasks.tests, "all")
