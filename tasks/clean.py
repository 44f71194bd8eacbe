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
import shutil

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


@task
def cdk_out(c):
    # type: (Context) -> None
    """
    remove synthesized cloud assemblies
    """
    path = os.path.join(PROJECT_ROOT, 'cdk.out')
    if os.path.isdir(path):
        print(f'deleting {path}')
        shutil.rmtree(path)


@task
def caches(c):
    # type: (Context) -> None
    """
    remove python and pytest caches
    """
    for root, dirs, _ in os.walk(PROJECT_ROOT):
        for name in ('__pycache__', '.pytest_cache'):
            if name in dirs:
                shutil.rmtree(os.path.join(root, name))
                dirs.remove(name)


@task(name='all', default=True, pre=[cdk_out, caches])
def clean_all(c):
    # type: (Context) -> None
    """
    clean all build and test artifacts
    """
    pass
