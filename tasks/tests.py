#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#
#  Licensed under the Apache License, Version 2.0 (the "License"). You may not use this file except in compliance
#  with the License. A copy of the License is located at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
#  or in the 'license' file accompanying this file. This file is distributed on an 'AS IS' BASIS, WITHOUT WARRANTIES
#  OR CONDITIONS OF ANY KIND, express or implied. See the License for the specific language governing permissions
#  and limitations under the License.

from invoke import task, Context

import os

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _run_unit_tests(c: Context, tests_src: str, keywords: str = None, capture_output: bool = False):
    cmd = f'pytest -v --disable-warnings {tests_src}'
    if capture_output:
        cmd = f'{cmd} --capture=tee-sys'
    if keywords is not None:
        cmd = f'{cmd} -k "{keywords}"'
    with c.cd(PROJECT_ROOT):
        c.run(cmd)


@task
def infrastructure(c, keywords=None, capture_output=False):
    # type: (Context, str, bool) -> None
    """
    run infrastructure unit tests
    """
    _run_unit_tests(c, 'source/tests/unit/infrastructure', keywords, capture_output)


@task
def handlers(c, keywords=None, capture_output=False):
    # type: (Context, str, bool) -> None
    """
    run lambda handler unit tests
    """
    _run_unit_tests(c, 'source/tests/unit/infrastructure/handlers', keywords, capture_output)


@task(name='all', default=True)
def tests_all(c, keywords=None, capture_output=False):
    # type: (Context, str, bool) -> None
    """
    run all unit tests
    """
    _run_unit_tests(c, 'source/tests', keywords, capture_output)
