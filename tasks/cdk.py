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


def _run_cdk(c: Context, command: str, env_file: str = None, context: list = None):
    cmd = f'cdk {command}'
    for item in context or []:
        cmd += f' -c {item}'
    env = {}
    if env_file:
        env['ENV'] = env_file
    with c.cd(PROJECT_ROOT):
        c.run(cmd, env=env)


@task(iterable=['context'])
def synth(c, env_file=None, context=None):
    # type: (Context, str, list) -> None
    """
    synthesize the order infrastructure stack
    """
    _run_cdk(c, 'synth', env_file, context)


@task(iterable=['context'])
def diff(c, env_file=None, context=None):
    # type: (Context, str, list) -> None
    """
    diff the deployed stack against the local definition
    """
    _run_cdk(c, 'diff', env_file, context)


@task(iterable=['context'])
def deploy(c, env_file=None, context=None, approve=False):
    # type: (Context, str, list, bool) -> None
    """
    deploy the order infrastructure stack
    """
    command = 'deploy'
    if approve:
        command += ' --require-approval never'
    _run_cdk(c, command, env_file, context)


@task(iterable=['context'])
def destroy(c, env_file=None, context=None):
    # type: (Context, str, list) -> None
    """
    destroy the order infrastructure stack
    """
    _run_cdk(c, 'destroy --force', env_file, context)
