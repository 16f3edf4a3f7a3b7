"""Arguments and nested blocks accepted inside each block.

Keys are block identities: fully qualified component types for top-level
components, bare keywords for nested blocks. Item order is presentation order.
"""

from __future__ import annotations

from alloylsp.schema.template import InsertTemplate, choice, snippet, tab
from alloylsp.schema.types import CompletionItem, CompletionKind, make_item


def _prop(
    label: str, template: InsertTemplate, documentation: str, detail: str
) -> CompletionItem:
    return make_item(label, CompletionKind.PROPERTY, template, documentation, detail)


def _block(
    label: str, template: InsertTemplate, documentation: str, detail: str
) -> CompletionItem:
    return make_item(label, CompletionKind.BLOCK, template, documentation, detail)


def _string(label: str, default: str, documentation: str, detail: str) -> CompletionItem:
    """Property assigned a quoted string."""
    return _prop(
        label, snippet(f'{label} = "', tab(1, default), '"'), documentation, detail
    )


def _bare(label: str, default: str, documentation: str, detail: str) -> CompletionItem:
    """Property assigned an unquoted value (number, list, expression)."""
    return _prop(label, snippet(f"{label} = ", tab(1, default)), documentation, detail)


def _enum(
    label: str,
    options: tuple[str, ...],
    documentation: str,
    detail: str,
    *,
    quoted: bool = True,
) -> CompletionItem:
    quote = '"' if quoted else ""
    return _prop(
        label,
        snippet(f"{label} = {quote}", choice(1, *options), quote),
        documentation,
        detail,
    )


def _receivers(label: str, default: str, documentation: str, detail: str) -> CompletionItem:
    """Property assigned a list of component exports."""
    return _prop(
        label, snippet(f"{label} = [", tab(1, default), "]"), documentation, detail
    )


_BOOL = ("true", "false")
_RELABEL_ACTIONS = (
    "replace",
    "keep",
    "drop",
    "hashmod",
    "labelmap",
    "labeldrop",
    "labelkeep",
)
_ATTRIBUTE_ACTIONS = ("insert", "update", "upsert", "delete", "hash", "extract")
_KUBERNETES_ROLES = ("node", "pod", "endpoint", "service", "ingress", "container")

_TLS_CONFIG_BLOCK = _block(
    "tls_config",
    snippet(
        "tls_config {\n"
        '  ca_pem_file = "', tab(1, "path/to/ca.pem"), '"\n'
        '  cert_pem_file = "', tab(2, "path/to/cert.pem"), '"\n'
        '  key_pem_file = "', tab(3, "path/to/key.pem"), '"\n'
        "  insecure_skip_verify = ", choice(4, *_BOOL), "\n"
        "}",
    ),
    "TLS settings for secure connections.",
    "tls_config - optional",
)

_BASIC_AUTH_BLOCK = _block(
    "basic_auth",
    snippet(
        "basic_auth {\n"
        '  username = "', tab(1, "user"), '"\n'
        '  password = "', tab(2, "password"), '"\n'
        "}",
    ),
    "HTTP basic authentication credentials.",
    "basic_auth - optional",
)

_OUTPUT_BLOCK = _block(
    "output",
    snippet(
        "output {\n"
        "  metrics_receiver = [", tab(1, "/* receiver */"), "]\n"
        "  logs_receiver = [", tab(2, "/* receiver */"), "]\n"
        "  traces_receiver = [", tab(3, "/* receiver */"), "]\n"
        "}",
    ),
    "Receivers for the metrics, logs and traces this component produces.",
    "output - required",
)

_BEARER_TOKEN = _string(
    "bearer_token", "your_token", "Bearer token used for authentication.", "secret - optional"
)


def _forward_to(receiver: str, example: str) -> CompletionItem:
    return _receivers(
        "forward_to",
        f"/* {example} */",
        "Receivers to send collected data to.",
        f"list({receiver}) - required",
    )


def _statements_block(label: str, contexts: tuple[str, ...], example: str) -> CompletionItem:
    signal = label.split("_", 1)[0]
    return _block(
        label,
        snippet(
            f"{label} {{\n"
            '  context = "', choice(1, *contexts), '"\n'
            "  statements = [\n"
            '    "', tab(2, example), '",\n'
            "  ]\n"
            "}",
        ),
        f"OTTL statements that transform {signal}s.",
        f"{label} - optional",
    )


def _context(contexts: tuple[str, ...]) -> CompletionItem:
    return _enum(
        "context", contexts, "OTTL context the statements run in.", "string - required"
    )


_STATEMENTS = _prop(
    "statements",
    snippet(
        "statements = [\n"
        '  "', tab(1, 'set(body, \\"new_body\\") where body == \\"old_body\\"'), '",\n'
        '  "', tab(2, 'set(attributes[\\"my_attr\\"], \\"my_value\\")'), '",\n'
        "]",
    ),
    "OTTL statements to execute in order.",
    "list(string) - required",
)

_LOG_CONTEXTS = ("log", "resource", "scope")
_METRIC_CONTEXTS = ("metric", "datapoint", "resource", "scope")
_TRACE_CONTEXTS = ("span", "spanevent", "resource", "scope")

_CLIENT_BLOCK = _block(
    "client",
    snippet(
        "client {\n"
        '  endpoint = "', tab(1, "localhost:4317"), '"\n'
        "  tls_config {\n"
        "    insecure_skip_verify = ", choice(2, *_BOOL), "\n"
        "  }\n"
        "}",
    ),
    "Connection settings for the remote endpoint.",
    "client - required",
)


# --- Top-level components ---

_COMPONENT_BLOCKS: dict[str, tuple[CompletionItem, ...]] = {
    "prometheus.scrape": (
        _prop(
            "targets",
            snippet(
                "targets = [\n"
                "  {\n"
                '    __address__ = "', tab(1, "localhost:9090"), '"\n'
                "  }\n"
                "]",
            ),
            "Targets to scrape metrics from.",
            "list(map(string)) - required",
        ),
        _forward_to("MetricsReceiver", "other.component.label.export_name"),
        _BEARER_TOKEN,
        _string(
            "interval", "1m", "How often to scrape each target.", "duration - optional (default: 1m)"
        ),
        _string(
            "scrape_timeout",
            "10s",
            "Timeout for a single scrape request.",
            "duration - optional (default: 10s)",
        ),
        _string(
            "metrics_path",
            "/metrics",
            "HTTP path to fetch metrics from.",
            "string - optional (default: /metrics)",
        ),
        _enum("scheme", ("http", "https"), "URL scheme for scrape requests.", "string - optional"),
        _enum(
            "honor_labels",
            _BOOL,
            "Keep labels from the scraped data when they collide with target labels.",
            "bool - optional (default: false)",
            quoted=False,
        ),
        _string("job_name", "my-job", "Value of the job label for scraped metrics.", "string - optional"),
        _prop(
            "metric_relabel_configs",
            snippet(
                "metric_relabel_configs = [\n"
                "  {\n"
                '    source_labels = ["', tab(1, "__name__"), '"]\n'
                '    regex = "', tab(2, ".*"), '"\n'
                '    action = "', choice(3, *_RELABEL_ACTIONS), '"\n'
                "  }\n"
                "]",
            ),
            "Relabeling rules applied to metrics before ingestion.",
            "list(relabel_config) - optional",
        ),
        _BASIC_AUTH_BLOCK,
        _TLS_CONFIG_BLOCK,
    ),
    "prometheus.remote_write": (
        _block(
            "endpoint",
            snippet(
                "endpoint {\n"
                '  url = "', tab(1, "http://localhost:9090/api/v1/write"), '"\n'
                '  remote_timeout = "', tab(2, "30s"), '"\n'
                "}",
            ),
            "Remote endpoint to send metrics to.",
            "endpoint - required",
        ),
        _string("wal_directory", "/tmp/agent-wal", "Directory for the write-ahead log.", "string - optional"),
        _prop(
            "external_labels",
            snippet("external_labels = {\n  ", tab(1, "cluster"), ' = "', tab(2, "prod"), '"\n}'),
            "Labels added to every metric sent to the endpoint.",
            "map(string) - optional",
        ),
    ),
    "loki.write": (
        _block(
            "endpoint",
            snippet(
                "endpoint {\n"
                '  url = "', tab(1, "http://localhost:3100/loki/api/v1/push"), '"\n'
                '  bearer_token = "', tab(2, "your_token"), '"\n'
                "}",
            ),
            "Loki endpoint to push log entries to.",
            "endpoint - required",
        ),
        _string(
            "connection_timeout",
            "1m",
            "Maximum time to wait for a connection.",
            "duration - optional (default: 1m)",
        ),
        _prop(
            "external_labels",
            snippet("external_labels = {\n  ", tab(1, "cluster"), ' = "', tab(2, "prod"), '"\n}'),
            "Labels added to every log entry sent to Loki.",
            "map(string) - optional",
        ),
    ),
    "loki.source.file": (
        _prop(
            "targets",
            snippet(
                "targets = [\n"
                "  {\n"
                '    __path__ = "', tab(1, "/var/log/*.log"), '"\n'
                '    job = "', tab(2, "mylogs"), '"\n'
                "  }\n"
                "]",
            ),
            "Files to tail.",
            "list(map(string)) - required",
        ),
        _forward_to("LogsReceiver", "loki.write.my_loki_writer.receiver"),
        _string(
            "polling_interval",
            "1s",
            "How often to check for new files or changes.",
            "duration - optional (default: 1s)",
        ),
    ),
    "otelcol.receiver.otlp": (
        _block(
            "http",
            snippet("http {\n" '  endpoint = "', tab(1, "0.0.0.0:4318"), '"\n' "}"),
            "OTLP over HTTP server settings.",
            "http - optional",
        ),
        _block(
            "grpc",
            snippet("grpc {\n" '  endpoint = "', tab(1, "0.0.0.0:4317"), '"\n' "}"),
            "OTLP over gRPC server settings.",
            "grpc - optional",
        ),
        _OUTPUT_BLOCK,
    ),
    "otelcol.processor.batch": (
        _OUTPUT_BLOCK,
        _string(
            "timeout", "5s", "Maximum time to wait before sending a batch.", "duration - optional (default: 5s)"
        ),
        _bare(
            "send_batch_size",
            "1000",
            "Number of items that triggers sending a batch.",
            "number - optional (default: 1000)",
        ),
        _bare(
            "send_batch_max_size",
            "0",
            "Upper bound on batch size; 0 means no limit.",
            "number - optional (default: 0)",
        ),
    ),
    "otelcol.exporter.otlp": (_CLIENT_BLOCK,),
    "otelcol.exporter.prometheus": (
        _block(
            "output",
            snippet("output {\n" "  metrics_receiver = [", tab(1, "/* receiver */"), "]\n" "}"),
            "Receivers for the converted metrics.",
            "output - required",
        ),
    ),
    "otelcol.exporter.loki": (_CLIENT_BLOCK,),
    "otelcol.exporter.prometheus_remote_write": (_CLIENT_BLOCK,),
    "discovery.kubernetes": (
        _block(
            "selectors",
            snippet(
                "selectors {\n" '  role = "', choice(1, *_KUBERNETES_ROLES), '"\n' "}"
            ),
            "Filters restricting which Kubernetes resources are discovered.",
            "selectors - optional",
        ),
        _string(
            "kubeconfig_file",
            "/etc/kubernetes/kubeconfig.yaml",
            "Path to a kubeconfig file.",
            "string - optional",
        ),
        _forward_to("TargetsReceiver", "prometheus.scrape.my_scraper.targets"),
    ),
    "local.file_match": (
        _prop(
            "path_targets",
            snippet(
                "path_targets = [\n"
                "  {\n"
                '    __path__ = "', tab(1, "/var/log/*.log"), '"\n'
                '    component_id = "', tab(2, "my_loki_source"), '"\n'
                "  }\n"
                "]",
            ),
            "Path patterns to match and the labels attached to each match.",
            "list(map(string)) - required",
        ),
        _string(
            "sync_period",
            "10s",
            "How often to re-evaluate the path patterns.",
            "duration - optional (default: 10s)",
        ),
    ),
    "otelcol.processor.resource": (
        _block(
            "attributes",
            snippet(
                "attributes {\n"
                '  service.name = "', tab(1, "my-application"), '"\n'
                '  host.name = "', tab(2, "my-host"), '"\n'
                "}",
            ),
            "Resource attributes to add or modify.",
            "attributes - required",
        ),
    ),
    "otelcol.processor.attributes": (
        _block(
            "actions",
            snippet(
                "actions {\n"
                '  action = "', choice(1, *_ATTRIBUTE_ACTIONS), '"\n'
                '  key = "', tab(2, "environment"), '"\n'
                '  value = "', tab(3, "production"), '"\n'
                "}",
            ),
            "Action applied to matching attributes.",
            "list(actions) - required",
        ),
    ),
    "otelcol.processor.transform": (
        _statements_block(
            "log_statements",
            _LOG_CONTEXTS,
            'set(attributes[\\"new_attr\\"], \\"new_value\\")',
        ),
        _statements_block(
            "metric_statements",
            _METRIC_CONTEXTS,
            'set(attributes[\\"new_metric_attr\\"], \\"new_value\\")',
        ),
        _statements_block(
            "trace_statements",
            _TRACE_CONTEXTS,
            'set(attributes[\\"new_trace_attr\\"], \\"new_value\\")',
        ),
        _enum(
            "error_mode",
            ("propagate", "ignore", "silent"),
            "How statement errors are handled.",
            "string - optional (default: propagate)",
        ),
    ),
    "prometheus.exporter.unix": (
        _receivers(
            "set_collectors", '"cpu", "meminfo"', "Replaces the default collector set.", "list(string) - optional"
        ),
        _receivers(
            "enable_collectors", '"systemd"', "Collectors to enable in addition to the defaults.", "list(string) - optional"
        ),
        _receivers(
            "disable_collectors", '"diskstats"', "Collectors to disable.", "list(string) - optional"
        ),
        _enum(
            "include_exporter_metrics",
            _BOOL,
            "Also expose the exporter's own metrics.",
            "bool - optional (default: false)",
            quoted=False,
        ),
    ),
    "loki.process": (
        _forward_to("LogsReceiver", "loki.write.my_loki_writer.receiver"),
        _block(
            "stage",
            snippet("stage {\n  ", tab(1, "json {}"), "\n}"),
            "A processing stage; stages run in declaration order.",
            "stage - optional",
        ),
    ),
    "loki.relabel": (
        _forward_to("LogsReceiver", "loki.write.my_loki_writer.receiver"),
        _block(
            "rule",
            snippet(
                "rule {\n"
                '  source_labels = ["', tab(1, "filename"), '"]\n'
                '  regex = "', tab(2, "(.*)"), '"\n'
                '  target_label = "', tab(3, "path"), '"\n'
                '  action = "', choice(4, *_RELABEL_ACTIONS), '"\n'
                "}",
            ),
            "A relabeling rule; rules run in declaration order.",
            "rule - optional",
        ),
        _bare(
            "max_cache_size",
            "10000",
            "Maximum number of cached relabeling results.",
            "number - optional (default: 10000)",
        ),
    ),
}


# --- Nested blocks ---

_NESTED_BLOCKS: dict[str, tuple[CompletionItem, ...]] = {
    "endpoint": (
        _string("url", "http://localhost:9090/", "Endpoint URL.", "string - required"),
        _BEARER_TOKEN,
        _BASIC_AUTH_BLOCK,
        _TLS_CONFIG_BLOCK,
        _string(
            "remote_timeout", "30s", "Timeout for requests to the endpoint.", "duration - optional (default: 30s)"
        ),
    ),
    "basic_auth": (
        _string("username", "user", "Basic auth username.", "string - optional"),
        _string("password", "password", "Basic auth password.", "secret - optional"),
        _string(
            "password_file", "/etc/secrets/password", "File containing the password.", "string - optional"
        ),
    ),
    "tls_config": (
        _string("ca_pem_file", "path/to/ca.pem", "Path to the CA certificate PEM file.", "string - optional"),
        _string(
            "cert_pem_file", "path/to/cert.pem", "Path to the client certificate PEM file.", "string - optional"
        ),
        _string("key_pem_file", "path/to/key.pem", "Path to the client key PEM file.", "string - optional"),
        _string("server_name", "example.com", "Server name used to verify the certificate.", "string - optional"),
        _enum(
            "insecure_skip_verify",
            _BOOL,
            "Skip verification of the server certificate.",
            "bool - optional (default: false)",
            quoted=False,
        ),
    ),
    "http": (
        _string(
            "endpoint", "0.0.0.0:4318", "Address the HTTP server listens on.", "string - optional (default: 0.0.0.0:4318)"
        ),
        _prop(
            "cors_allowed_headers",
            snippet('cors_allowed_headers = ["', tab(1, "X-Something"), '"]'),
            "Headers allowed in CORS requests.",
            "list(string) - optional",
        ),
    ),
    "grpc": (
        _string(
            "endpoint", "0.0.0.0:4317", "Address the gRPC server listens on.", "string - optional (default: 0.0.0.0:4317)"
        ),
        _bare(
            "max_recv_msg_size_mib",
            "100",
            "Maximum size of a received message in MiB.",
            "number - optional (default: 100)",
        ),
    ),
    "output": (
        _receivers("metrics_receiver", "/* receiver */", "Receivers for metrics.", "list(MetricsReceiver) - optional"),
        _receivers("logs_receiver", "/* receiver */", "Receivers for logs.", "list(LogsReceiver) - optional"),
        _receivers("traces_receiver", "/* receiver */", "Receivers for traces.", "list(TracesReceiver) - optional"),
    ),
    "client": (
        _string("endpoint", "localhost:4317", "Address of the remote endpoint.", "string - required"),
        _TLS_CONFIG_BLOCK,
        _enum(
            "compression", ("gzip", "zlib", "none"), "Compression applied to requests.", "string - optional (default: gzip)"
        ),
    ),
    "selectors": (
        _enum("role", _KUBERNETES_ROLES, "Kind of Kubernetes resource to select.", "string - required"),
        _string(
            "label_selector", "app=my-app,environment=production", "Kubernetes label selector.", "string - optional"
        ),
        _string("field_selector", "metadata.name=my-service", "Kubernetes field selector.", "string - optional"),
    ),
    "attributes": (
        _string("service.name", "my-application", "Service name.", "string - optional"),
        _string("host.name", "my-host", "Host name.", "string - optional"),
        _string("environment", "production", "Deployment environment.", "string - optional"),
    ),
    "actions": (
        _enum("action", _ATTRIBUTE_ACTIONS, "Action to perform on the attribute.", "string - required"),
        _string("key", "my_attribute", "Attribute key.", "string - required"),
        _string(
            "value", "my_value", "Attribute value.", "string - optional (required for insert, update, upsert)"
        ),
        _string(
            "from_attribute",
            "source_attribute",
            "Attribute to copy the value from.",
            "string - optional (used with insert or update)",
        ),
    ),
    "log_statements": (_context(_LOG_CONTEXTS), _STATEMENTS),
    "metric_statements": (_context(_METRIC_CONTEXTS), _STATEMENTS),
    "trace_statements": (_context(_TRACE_CONTEXTS), _STATEMENTS),
    "stage": (
        _block(
            "json",
            snippet(
                "json {\n"
                "  expressions = {\n"
                '    "', tab(1, "field_name"), '" = "', tab(2, "target_label"), '"\n'
                "  }\n"
                "}",
            ),
            "Extracts fields from JSON log lines.",
            "json - optional",
        ),
        _block(
            "regex",
            snippet(
                "regex {\n"
                '  expression = "', tab(1, r"^(?P<level>\\S+) (?P<msg>.*)$"), '"\n'
                "}",
            ),
            "Extracts fields with a regular expression with named capture groups.",
            "regex - optional",
        ),
        _block(
            "labels",
            snippet("labels {\n  ", tab(1, "label_name"), " = ", tab(2, "null"), "\n}"),
            "Sets labels from extracted values.",
            "labels - optional",
        ),
        _string("output", "output_value", "Extracted field that replaces the log line.", "string - optional"),
    ),
    "json": (
        _prop(
            "expressions",
            snippet(
                "expressions = {\n"
                '  "', tab(1, "field_name"), '" = "', tab(2, "target_label"), '"\n'
                "}",
            ),
            "JMESPath expressions to extract.",
            "map(string) - required",
        ),
        _string("source", "message", "Extracted field to parse instead of the log line.", "string - optional"),
        _enum(
            "drop_malformed",
            _BOOL,
            "Drop log lines that are not valid JSON.",
            "bool - optional (default: false)",
            quoted=False,
        ),
    ),
    "regex": (
        _string("expression", r"^(?P<level>\\S+) (?P<msg>.*)$", "RE2 expression with named capture groups.", "string - required"),
        _string("source", "message", "Extracted field to parse instead of the log line.", "string - optional"),
    ),
    "labels": (
        _prop(
            "label_name",
            snippet(tab(1, "label_name"), ' = "', tab(2, "label_value"), '"'),
            "A label name and the extracted field to take its value from (null for the same name).",
            "string | null",
        ),
    ),
    "rule": (
        _prop(
            "source_labels",
            snippet('source_labels = ["', tab(1, "__name__"), '"]'),
            "Labels whose values are concatenated and matched.",
            "list(string) - optional",
        ),
        _string("separator", ";", "Separator placed between concatenated source labels.", "string - optional (default: ;)"),
        _string("regex", ".*", "Regular expression matched against the source value.", "string - optional (default: (.*))"),
        _string("target_label", "new_label", "Label written by the rule.", "string - optional (required for replace)"),
        _enum("action", _RELABEL_ACTIONS, "Relabeling action to perform.", "string - optional (default: replace)"),
        _string("replacement", "$1", "Replacement value for the replace action.", "string - optional (default: $1)"),
    ),
}

BLOCK_ITEMS: dict[str, tuple[CompletionItem, ...]] = {
    **_COMPONENT_BLOCKS,
    **_NESTED_BLOCKS,
}
