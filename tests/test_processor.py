"""Tests for response classification and parsing."""

from __future__ import annotations

import pytest
from rdflib import Dataset, Graph, URIRef
from rdflib.query import Result

from sparql_protocol.sparql.processor import (
    ResultKind,
    classify_content_type,
    parse_mime_type,
    parse_response,
)
from sparql_protocol.transport import BackendResponse

BASE = "http://example.org/sparql"

XML_RESULTS = b"""<?xml version="1.0"?>
<sparql xmlns="http://www.w3.org/2005/sparql-results#">
  <head><variable name="g"/></head>
  <results>
    <result><binding name="g"><uri>http://g/1</uri></binding></result>
  </results>
</sparql>
"""


class TestMimeType:
    @pytest.mark.parametrize(
        ("header", "mime"),
        [
            ("text/turtle", "text/turtle"),
            ("application/sparql-results+json; charset=UTF-8", "application/sparql-results+json"),
            ("Application/RDF+XML", "application/rdf+xml"),
            (None, ""),
            ("", ""),
        ],
    )
    def test_parameters_dropped(self, header, mime):
        assert parse_mime_type(header) == mime

    def test_classification(self):
        """Only the sparql-results family is tabular."""
        assert classify_content_type("application/sparql-results+xml") is ResultKind.RESULTS
        assert classify_content_type("application/sparql-results+json") is ResultKind.RESULTS
        assert classify_content_type("text/turtle") is ResultKind.GRAPH
        assert classify_content_type("application/x-unknown") is ResultKind.GRAPH


class TestParseResponse:
    def test_xml_results(self):
        response = BackendResponse(
            status=200,
            headers={"Content-Type": "application/sparql-results+xml"},
            body=XML_RESULTS,
        )

        result = parse_response(response, BASE)

        assert isinstance(result, Result)
        assert [row["g"] for row in result] == [URIRef("http://g/1")]

    def test_ntriples_graph(self):
        response = BackendResponse(
            status=200,
            headers={"content-type": "application/n-triples"},
            body=b"<http://x/s> <http://x/p> <http://x/o> .\n",
        )

        graph = parse_response(response, BASE)

        assert isinstance(graph, Graph)
        assert len(graph) == 1

    def test_nquads_keep_graph_names(self):
        """Quad formats parse into a Dataset."""
        response = BackendResponse(
            status=200,
            headers={"Content-Type": "application/n-quads"},
            body=b"<http://x/s> <http://x/p> <http://x/o> <http://x/g> .\n",
        )

        dataset = parse_response(response, BASE)

        assert isinstance(dataset, Dataset)
        assert len(dataset.graph(URIRef("http://x/g"))) == 1

    def test_unparseable_graph_type_surfaces(self):
        """Unknown RDF types fail in rdflib, not silently."""
        response = BackendResponse(
            status=200,
            headers={"Content-Type": "application/x-not-rdf"},
            body=b"garbage",
        )

        with pytest.raises(Exception):
            parse_response(response, BASE)
