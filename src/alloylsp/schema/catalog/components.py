"""Top-level component snippets.

Each item inserts a complete component declaration with its required
arguments pre-filled.
"""

from __future__ import annotations

from alloylsp.schema.template import InsertTemplate, choice, snippet, tab
from alloylsp.schema.types import CompletionItem, CompletionKind, make_item


def _component(
    name: str, template: InsertTemplate, documentation: str
) -> CompletionItem:
    return make_item(
        name,
        CompletionKind.COMPONENT,
        template,
        documentation,
        f'{name} "label" {{ ... }}',
    )


COMPONENT_ITEMS: tuple[CompletionItem, ...] = (
    _component(
        "prometheus.scrape",
        snippet(
            'prometheus.scrape "', tab(1, "my_scraper"), '" {\n'
            "  targets = [\n"
            "    {\n"
            '      __address__ = "', tab(2, "localhost:9090"), '"\n'
            "    }\n"
            "  ]\n"
            "  forward_to = [", tab(3, "/* other.component.label.receiver */"), "]\n"
            "}",
        ),
        "Scrapes Prometheus metrics from a list of targets.",
    ),
    _component(
        "prometheus.remote_write",
        snippet(
            'prometheus.remote_write "', tab(1, "my_remote_write"), '" {\n'
            "  endpoint {\n"
            '    url = "', tab(2, "http://localhost:9090/api/v1/write"), '"\n'
            "  }\n"
            "}",
        ),
        "Sends metrics to a Prometheus remote_write endpoint.",
    ),
    _component(
        "loki.write",
        snippet(
            'loki.write "', tab(1, "my_loki_writer"), '" {\n'
            "  endpoint {\n"
            '    url = "', tab(2, "http://localhost:3100/loki/api/v1/push"), '"\n'
            "  }\n"
            '  connection_timeout = "', tab(3, "1m"), '"\n'
            "}",
        ),
        "Sends log entries to Loki.",
    ),
    _component(
        "loki.source.file",
        snippet(
            'loki.source.file "', tab(1, "my_file_source"), '" {\n'
            "  targets = [\n"
            "    {\n"
            '      __path__ = "', tab(2, "/var/log/*.log"), '"\n'
            '      job = "', tab(3, "mylogs"), '"\n'
            "    }\n"
            "  ]\n"
            "  forward_to = [", tab(4, "/* other.component.label.receiver */"), "]\n"
            "}",
        ),
        "Reads log entries from local files and forwards them to Loki receivers.",
    ),
    _component(
        "otelcol.receiver.otlp",
        snippet(
            'otelcol.receiver.otlp "', tab(1, "my_otlp_receiver"), '" {\n'
            "  http {\n"
            '    endpoint = "', tab(2, "0.0.0.0:4318"), '"\n'
            "  }\n"
            "  grpc {\n"
            '    endpoint = "', tab(3, "0.0.0.0:4317"), '"\n'
            "  }\n"
            "  output {\n"
            "    metrics_receiver = [",
            tab(4, "/* otelcol.processor.batch.metrics.receiver */"), "]\n"
            "    logs_receiver = [",
            tab(5, "/* otelcol.processor.batch.logs.receiver */"), "]\n"
            "    traces_receiver = [",
            tab(6, "/* otelcol.processor.batch.traces.receiver */"), "]\n"
            "  }\n"
            "}",
        ),
        "Receives telemetry data (metrics, logs and traces) over OTLP.",
    ),
    _component(
        "otelcol.processor.batch",
        snippet(
            'otelcol.processor.batch "', tab(1, "my_batch_processor"), '" {\n'
            "  output {\n"
            "    metrics_receiver = [",
            tab(2, "/* otelcol.exporter.otlp.metrics.receiver */"), "]\n"
            "    logs_receiver = [",
            tab(3, "/* otelcol.exporter.otlp.logs.receiver */"), "]\n"
            "    traces_receiver = [",
            tab(4, "/* otelcol.exporter.otlp.traces.receiver */"), "]\n"
            "  }\n"
            "}",
        ),
        "Batches telemetry data before passing it downstream.",
    ),
    _component(
        "otelcol.exporter.otlp",
        snippet(
            'otelcol.exporter.otlp "', tab(1, "my_otlp_exporter"), '" {\n'
            "  client {\n"
            '    endpoint = "', tab(2, "localhost:4317"), '"\n'
            "  }\n"
            "}",
        ),
        "Exports telemetry data to an OTLP endpoint.",
    ),
    _component(
        "otelcol.exporter.prometheus",
        snippet(
            'otelcol.exporter.prometheus "', tab(1, "my_prom_exporter"), '" {\n'
            "  output {\n"
            "    metrics_receiver = [",
            tab(2, "/* prometheus.remote_write.my_remote_write.receiver */"), "]\n"
            "  }\n"
            "}",
        ),
        "Converts OpenTelemetry metrics to Prometheus metrics.",
    ),
    _component(
        "discovery.kubernetes",
        snippet(
            'discovery.kubernetes "', tab(1, "my_k8s_discovery"), '" {\n'
            "  selectors {\n"
            '    role = "',
            choice(2, "node", "pod", "endpoint", "service", "ingress", "container"),
            '"\n'
            "  }\n"
            "  forward_to = [", tab(3, "/* prometheus.scrape.my_scraper.targets */"), "]\n"
            "}",
        ),
        "Discovers scrape targets in a Kubernetes cluster.",
    ),
    _component(
        "local.file_match",
        snippet(
            'local.file_match "', tab(1, "my_file_matcher"), '" {\n'
            "  path_targets = [\n"
            "    {\n"
            '      __path__ = "', tab(2, "/var/log/*.log"), '"\n'
            '      component_id = "', tab(3, "my_loki_source"), '"\n'
            "    }\n"
            "  ]\n"
            "}",
        ),
        "Watches files matching path patterns and exports them as targets.",
    ),
    _component(
        "otelcol.processor.resource",
        snippet(
            'otelcol.processor.resource "', tab(1, "add_service_name"), '" {\n'
            "  attributes {\n"
            '    service.name = "', tab(2, "my-application"), '"\n'
            "  }\n"
            "}",
        ),
        "Adds or modifies OpenTelemetry resource attributes.",
    ),
    _component(
        "otelcol.processor.attributes",
        snippet(
            'otelcol.processor.attributes "', tab(1, "add_environment"), '" {\n'
            "  actions {\n"
            '    action = "',
            choice(2, "insert", "update", "upsert", "delete", "hash", "extract"),
            '"\n'
            '    key = "', tab(3, "environment"), '"\n'
            '    value = "', tab(4, "production"), '"\n'
            "  }\n"
            "}",
        ),
        "Inserts, updates or deletes attributes on spans, metrics or logs.",
    ),
    _component(
        "otelcol.processor.transform",
        snippet(
            'otelcol.processor.transform "', tab(1, "transform_logs"), '" {\n'
            "  log_statements {\n"
            '    context = "', choice(2, "log", "resource", "scope"), '"\n'
            "    statements = [\n"
            '      "', tab(3, 'set(body, \\"transformed_log\\") where body == \\"old_log\\"'),
            '",\n'
            "    ]\n"
            "  }\n"
            "}",
        ),
        "Transforms telemetry data with the OpenTelemetry Transformation Language.",
    ),
    _component(
        "prometheus.exporter.unix",
        snippet(
            'prometheus.exporter.unix "', tab(1, "node_exporter"), '" {\n'
            "  ", tab(2, "// Defaults expose the standard node_exporter collectors"), "\n"
            "}",
        ),
        "Exposes host operating system metrics like node_exporter does.",
    ),
    _component(
        "prometheus.integration.node_exporter",
        snippet(
            'prometheus.integration.node_exporter "', tab(1, "my_node_integration"),
            '" {\n'
            '  // disable_collectors = ["diskstats"]\n'
            "}",
        ),
        "Node exporter integration collecting host metrics.",
    ),
    _component(
        "prometheus.integration.agent_exporter",
        snippet(
            'prometheus.integration.agent_exporter "', tab(1, "agent_metrics"), '" {\n'
            "  // Exposes the agent's own metrics\n"
            "}",
        ),
        "Exposes internal metrics of the running agent.",
    ),
    _component(
        "loki.process",
        snippet(
            'loki.process "', tab(1, "log_processor"), '" {\n'
            "  forward_to = [", tab(2, "/* loki.write.my_loki_writer.receiver */"), "]\n"
            "  stage {\n"
            "    json {\n"
            "      expressions = {\n"
            '        message = "message"\n'
            '        level = "level"\n'
            "      }\n"
            "    }\n"
            "  }\n"
            "  stage {\n"
            "    labels {\n"
            "      level = null\n"
            "    }\n"
            "  }\n"
            "}",
        ),
        "Processes Loki log lines through a pipeline of stages.",
    ),
    _component(
        "loki.relabel",
        snippet(
            'loki.relabel "', tab(1, "log_relabeler"), '" {\n'
            "  forward_to = [", tab(2, "/* loki.write.my_loki_writer.receiver */"), "]\n"
            "  rule {\n"
            '    source_labels = ["', tab(3, "filename"), '"]\n'
            '    regex = "', tab(4, "(.*)"), '"\n'
            '    target_label = "', tab(5, "path"), '"\n'
            '    action = "',
            choice(6, "replace", "keep", "drop", "labelmap", "labeldrop", "labelkeep"),
            '"\n'
            "  }\n"
            "}",
        ),
        "Applies relabeling rules to Loki log streams.",
    ),
    _component(
        "otelcol.exporter.loki",
        snippet(
            'otelcol.exporter.loki "', tab(1, "my_otlp_loki_exporter"), '" {\n'
            "  client {\n"
            '    endpoint = "', tab(2, "http://localhost:3100/loki/api/v1/push"), '"\n'
            "  }\n"
            "}",
        ),
        "Exports OpenTelemetry logs to Loki.",
    ),
    _component(
        "otelcol.exporter.prometheus_remote_write",
        snippet(
            'otelcol.exporter.prometheus_remote_write "',
            tab(1, "my_otlp_prom_remote_write_exporter"), '" {\n'
            "  client {\n"
            '    endpoint = "', tab(2, "http://localhost:9090/api/v1/write"), '"\n'
            "  }\n"
            "}",
        ),
        "Exports OpenTelemetry metrics to a Prometheus remote_write endpoint.",
    ),
)
